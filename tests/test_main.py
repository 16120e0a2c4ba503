import logging

import pytest

from environment import Stats
from main import format_stats, parse_args, run_headless


def test_parse_args_defaults():
    args = parse_args([])
    assert args.preset == 'bloom'
    assert args.headless is None
    assert args.speed == 1


def test_parse_args_rejects_unknown_preset():
    with pytest.raises(SystemExit):
        parse_args(['--preset', 'tropical'])


def test_headless_run(caplog):
    args = parse_args(['--headless', '30', '--width', '20', '--height', '12',
                       '--population', '25', '--log-every', '10', '--seed', 'cli'])
    with caplog.at_level(logging.INFO, logger='main'):
        stats = run_headless(args)
    assert isinstance(stats, Stats)
    assert stats.ticks <= 30
    assert any("Done." in r.getMessage() for r in caplog.records)


def test_headless_run_is_reproducible():
    argv = ['--headless', '20', '--width', '16', '--height', '10',
            '--move', '0.2', '--seed', 'again']
    assert run_headless(parse_args(argv)) == run_headless(parse_args(argv))


def test_format_stats():
    text = format_stats(Stats(ticks=3, count=2, mean_energy=1.25,
                              mean_food=0.5, births=1, deaths=0))
    assert "Ticks: 3" in text and "Agents: 2" in text and "Avg food: 0.500" in text
