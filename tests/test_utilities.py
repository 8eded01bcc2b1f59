from pathlib import Path

import pytest

from alphabet import Alphabet
from config_reader import load_config
from errors import ConfigError, UnknownSymbolError
from utilities import group_blocks, preprocess_message, process_stream, standard_config


def test_preprocess_strips_whitespace(upper: Alphabet) -> None:
    assert preprocess_message(" FROM HIS\tSHOULDER ", upper) == "FROMHISSHOULDER"


def test_preprocess_rejects_foreign_symbols(upper: Alphabet) -> None:
    with pytest.raises(UnknownSymbolError):
        preprocess_message("hello", upper)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", ""),
        ("ABC", "ABC"),
        ("ABCDE", "ABCDE"),
        ("ABCDEFGHIJKL", "ABCDE FGHIJ KL"),
    ],
)
def test_group_blocks(text: str, expected: str) -> None:
    assert group_blocks(text) == expected


def test_group_blocks_custom_size() -> None:
    assert group_blocks("ABCDEFG", 3) == "ABC DEF G"


def test_standard_config_shape() -> None:
    cfg = standard_config()
    assert (cfg.num_rotors, cfg.pawls) == (5, 3)
    names = {w.name for w in cfg.wheels}
    assert {"I", "VIII", "Beta", "Gamma", "B", "C"} <= names


def test_standard_config_matches_text_file(data_dir: Path) -> None:
    text = {w.name: w for w in load_config(data_dir / "naval.conf").wheels}
    std = {w.name: w for w in standard_config().wheels}
    for name, wheel in text.items():
        assert std[name].kind is wheel.kind
        assert std[name].notches == wheel.notches
        assert sorted(std[name].cycles.split()) == sorted(wheel.cycles.split())


def test_process_stream(data_dir: Path) -> None:
    cfg = load_config(data_dir / "naval.conf")
    lines = (data_dir / "five_a.in").read_text(encoding="utf-8").splitlines()
    assert list(process_stream(cfg, lines)) == ["BDZGO", "", "BDZGO"]


def test_process_stream_keeps_state_across_lines() -> None:
    lines = ["* B Beta I II III AAAA", "AA", "AAA"]
    assert list(process_stream(standard_config(), lines)) == ["BD", "ZGO"]


def test_process_stream_skips_leading_blank_lines() -> None:
    lines = ["", "   ", "* B Beta I II III AAAA", "AAAAA"]
    assert list(process_stream(standard_config(), lines)) == ["BDZGO"]


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["AAAAA"],
        ["* B Beta I II III AAAA", "AA*AA"],
        ["* B Beta I II III AAAA", "aaaaa"],
        ["* B Beta I II III"],
    ],
)
def test_process_stream_errors(lines) -> None:
    with pytest.raises((ConfigError, UnknownSymbolError)):
        list(process_stream(standard_config(), lines))


@pytest.mark.parametrize("block", [0, -1])
def test_group_blocks_rejects_non_positive(block: int) -> None:
    with pytest.raises(ConfigError):
        group_blocks("ABCDE", block)


def test_process_stream_joined_ring_letters() -> None:
    lines = ["* B Beta I II III AAAAABBB", "AAAAA"]
    assert list(process_stream(standard_config(), lines)) == ["EWTYX"]
