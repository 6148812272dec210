"""Tests for declaration detection."""
from bela.config import GameConfig
from bela.deal import Seat
from bela.declarations import detect_all, detect_declarations, declaration_points, runs_in_suit
from bela.deck import Suit, card_from_str
from bela.state import DeclarationType


def _hand(*texts):
    return [card_from_str(t) for t in texts]


def test_scenario_bela():
    hand = _hand("KS", "QS", "7H", "9H", "JD", "8C", "AC", "10D")
    decls = detect_declarations(hand, Seat.EAST, Suit.SPADES, GameConfig())
    assert [(d.type, d.points) for d in decls] == [(DeclarationType.BELA, 20)]
    assert decls[0].seat == Seat.EAST
    assert set(decls[0].cards) == set(_hand("KS", "QS"))


def test_bela_needs_trump_suit():
    hand = _hand("KS", "QS", "7H", "9H")
    assert detect_declarations(hand, Seat.EAST, Suit.HEARTS, GameConfig()) == []


def test_run_lengths():
    config = GameConfig()
    tierce = detect_declarations(_hand("7H", "8H", "9H", "AS"), Seat.NORTH, Suit.CLUBS, config)
    quarte = detect_declarations(_hand("10D", "JD", "QD", "KD"), Seat.NORTH, Suit.CLUBS, config)
    quint = detect_declarations(_hand("7C", "8C", "9C", "10C", "JC", "QC"), Seat.NORTH, Suit.HEARTS, config)
    assert [(d.type, d.points) for d in tierce] == [(DeclarationType.TIERCE, 20)]
    assert [(d.type, d.points) for d in quarte] == [(DeclarationType.QUARTE, 50)]
    assert [(d.type, d.points) for d in quint] == [(DeclarationType.QUINT, 100)]
    assert len(quint[0].cards) == 6


def test_long_run_is_declared_once():
    hand = _hand("7H", "8H", "9H", "10H", "JH")
    decls = detect_declarations(hand, Seat.SOUTH, Suit.SPADES, GameConfig())
    assert len(decls) == 1
    assert decls[0].type == DeclarationType.QUINT


def test_separate_runs_in_one_suit():
    hand = _hand("7H", "8H", "9H", "JH", "QH", "KH")
    runs = runs_in_suit(hand, Suit.HEARTS)
    assert [len(r) for r in runs] == [3, 3]
    decls = detect_declarations(hand, Seat.SOUTH, Suit.SPADES, GameConfig())
    assert [d.type for d in decls] == [DeclarationType.TIERCE, DeclarationType.TIERCE]


def test_bela_and_run_together():
    hand = _hand("JS", "QS", "KS", "7D")
    decls = detect_declarations(hand, Seat.WEST, Suit.SPADES, GameConfig())
    assert {d.type for d in decls} == {DeclarationType.BELA, DeclarationType.TIERCE}
    assert sum(d.points for d in decls) == 40


def test_declarations_disabled():
    hand = _hand("KS", "QS", "JS", "10S")
    assert detect_declarations(hand, Seat.WEST, Suit.SPADES, GameConfig(declarations_enabled=False)) == []


def test_detection_is_deterministic():
    hand = _hand("7H", "8H", "9H", "KS", "QS", "AD", "KD", "QD")
    a = detect_declarations(hand, Seat.NORTH, Suit.SPADES, GameConfig())
    b = detect_declarations(list(reversed(hand)), Seat.NORTH, Suit.SPADES, GameConfig())
    assert a == b
    assert all(d.type != DeclarationType.BELOT for d in a)


def test_detect_all_and_points():
    hands = [
        _hand("7H", "8H", "9H"),
        _hand("KS", "QS"),
        _hand("AD", "7C"),
        _hand("10C", "JC", "QC", "KC"),
    ]
    decls = detect_all(hands, Suit.SPADES, GameConfig())
    assert [d.seat for d in decls] == [Seat.NORTH, Seat.EAST, Seat.WEST]
    assert declaration_points(decls, (Seat.NORTH, Seat.SOUTH)) == 20
    assert declaration_points(decls, (Seat.EAST, Seat.WEST)) == 70
