"""
lanemap CLI Integration Tests

Runs the subcommands programmatically through their run() functions, the
way argparse would call them, on a small feature table.

Run: pytest lanemap/tests/integration/ -v
"""
from argparse import Namespace

import pandas as pd
import pytest

from lanemap.cli import layout as layout_cmd
from lanemap.cli import ticks as ticks_cmd


@pytest.fixture
def feature_tsv(feature_table, tmp_path):
    path = tmp_path / "features.tsv"
    feature_table.to_csv(path, sep='\t', index=False)
    return path


def layout_args(input_file, output_file, **overrides):
    args = dict(
        input=str(input_file),
        output=str(output_file),
        ticks_output=None,
        width=None,
        preset='default',
        draw_style='expand',
        measure='monospace',
        slice=None,
        mode='inclusive',
        debug=False,
    )
    args.update(overrides)
    return Namespace(**args)


# ============================================================================
# LAYOUT SUBCOMMAND
# ============================================================================

@pytest.mark.integration
def test_layout_writes_placements(feature_tsv, tmp_path):
    """Every feature is placed, one track per 'track' value"""
    output = tmp_path / "out" / "placements.tsv"
    layout_cmd.run(layout_args(feature_tsv, output))

    frame = pd.read_csv(output, sep='\t')
    assert len(frame) == 4
    assert sorted(frame['track'].unique()) == [0, 1]
    # alpha [100, 900) and beta [500, 1700) overlap
    assert sorted(frame.loc[frame['track'] == 0, 'lane']) == [0, 1]


@pytest.mark.integration
def test_layout_ticks_output(feature_tsv, tmp_path):
    ticks = tmp_path / "ticks.tsv"
    layout_cmd.run(layout_args(feature_tsv, tmp_path / "p.tsv", ticks_output=str(ticks)))

    frame = pd.read_csv(ticks, sep='\t')
    assert len(frame) > 0
    assert 'major' in set(frame['kind'])


@pytest.mark.integration
def test_layout_strict_slice(feature_tsv, tmp_path):
    """Only features overlapping [600, 2700] survive, clipped to it"""
    output = tmp_path / "slice.tsv"
    layout_cmd.run(layout_args(feature_tsv, output, slice=[600.0, 2700.0], mode='strict'))

    frame = pd.read_csv(output, sep='\t')
    assert frame['position'].min() >= 600
    assert (frame['position'] + frame['length']).max() <= 2700
    assert len(frame) == 4


@pytest.mark.integration
def test_layout_collapse(feature_tsv, tmp_path):
    output = tmp_path / "collapse.tsv"
    layout_cmd.run(layout_args(feature_tsv, output, draw_style='collapse'))

    frame = pd.read_csv(output, sep='\t')
    assert list(frame['merged']) == [2, 2]


@pytest.mark.integration
def test_layout_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        layout_cmd.run(layout_args(tmp_path / "nope.tsv", tmp_path / "out.tsv"))


# ============================================================================
# TICKS SUBCOMMAND
# ============================================================================

@pytest.mark.integration
def test_ticks_reference_domain(capsys):
    ticks_cmd.run(Namespace(min=0, max=10000, width=760, label_buffer=10, no_prettify=False))

    lines = dict(line.split('\t', 1) for line in capsys.readouterr().out.strip().splitlines())
    assert int(float(lines['major'])) in (1000, 5000, 10000)
    assert lines['domain'].startswith('0-')
