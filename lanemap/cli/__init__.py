"""Subcommands of the lanemap CLI"""
