import pytest

from alphabet import Alphabet
from errors import ConfigError, UnknownSymbolError
from permutation import Permutation
from utilities import WHEELS


@pytest.fixture
def hilf() -> Permutation:
    return Permutation("(HIG)(NF)(L)", Alphabet("HILFNGR"))


@pytest.mark.parametrize(
    "src, dst",
    [("H", "I"), ("I", "G"), ("G", "H"), ("L", "L"), ("F", "N"), ("N", "F"), ("R", "R")],
)
def test_permute_symbols(hilf: Permutation, src: str, dst: str) -> None:
    assert hilf.permute(src) == dst
    assert hilf.invert(dst) == src


def test_permute_indices(hilf: Permutation) -> None:
    # H=0 I=1 L=2 F=3 N=4 G=5 R=6
    assert hilf.permute(0) == 1
    assert hilf.permute(5) == 0
    assert hilf.invert(0) == 5
    assert hilf.permute(6) == 6


def test_invert_undoes_permute(upper: Alphabet) -> None:
    perm = Permutation("(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)", upper)
    for ch in upper.symbols:
        assert perm.invert(perm.permute(ch)) == ch
        assert perm.permute(perm.invert(ch)) == ch


def test_derangement() -> None:
    assert Permutation("(BACD)", Alphabet("ABCD")).derangement()
    assert not Permutation("(S)", Alphabet("S")).derangement()
    assert not Permutation("(AB)", Alphabet("ABC")).derangement()


def test_identity_when_no_cycles(upper: Alphabet) -> None:
    perm = Permutation("", upper)
    assert all(perm.permute(i) == i for i in range(26))
    assert perm.size() == 26
    assert perm.alphabet() is upper


def test_whitespace_between_cycles_ignored() -> None:
    alpha = Alphabet("ABCD")
    perm = Permutation("  (AB)\t (CD) ", alpha)
    assert perm.permute("A") == "B"
    assert perm.permute("D") == "C"


@pytest.mark.parametrize(
    "cycles",
    ["(AB)(BC)", "(ABA)", "(AB", "AB)", "((AB))", "()", "A(BC)", "(A B)", "(A*)"],
)
def test_malformed_cycles(cycles: str) -> None:
    with pytest.raises(ConfigError):
        Permutation(cycles, Alphabet("ABCD"))


def test_cycle_symbol_not_in_alphabet() -> None:
    with pytest.raises(UnknownSymbolError):
        Permutation("(AZ)", Alphabet("ABCD"))


def test_unknown_input() -> None:
    perm = Permutation("(AB)", Alphabet("ABCD"))
    with pytest.raises(UnknownSymbolError):
        perm.permute("Z")
    with pytest.raises(UnknownSymbolError):
        perm.invert(4)


def test_from_wiring_matches_wiring(upper: Alphabet) -> None:
    wiring = WHEELS["I"][2]
    perm = Permutation.from_wiring(wiring, upper)
    for i, ch in enumerate(upper.symbols):
        assert perm.permute(ch) == wiring[i]
    assert perm.cycles[0] == "AELTPHQXRU"


def test_from_wiring_rejects_bad_wiring(upper: Alphabet) -> None:
    with pytest.raises(ConfigError):
        Permutation.from_wiring("AAB", Alphabet("ABC"))
