"""Tests for the deck, the deal and the trick rules."""
import random

import pytest

from bela.config import GameConfig
from bela.deal import SEAT_ORDER, Seat, deal_initial, next_seat, rotation_from, team_of, Team
from bela.deck import Card, Rank, Suit, card_from_str, card_to_str, generate_deck, make_deck_32
from bela.errors import EmptyTrickError
from bela.play import can_win, card_beats, evaluate_trick, legal_plays, score_trick
from bela.state import Trick


def _cards(*texts):
    return [card_from_str(t) for t in texts]


def _trick(*plays):
    """plays: (seat, "10H") pairs in play order."""
    return Trick(cards=tuple((seat, card_from_str(t)) for seat, t in plays))


def test_deck_32():
    deck = make_deck_32()
    assert len(deck) == 32
    assert len(set(deck)) == 32


def test_generate_deck_is_seeded():
    a = generate_deck(random.Random(7))
    b = generate_deck(random.Random(7))
    assert a == b
    assert set(a) == set(make_deck_32())


def test_card_text_encoding():
    assert card_to_str(Card(Suit.HEARTS, Rank.TEN)) == "10H"
    assert card_from_str("AS") == Card(Suit.SPADES, Rank.ACE)
    assert card_from_str("7c") == Card(Suit.CLUBS, Rank.SEVEN)
    for card in make_deck_32():
        assert card_from_str(card_to_str(card)) == card
    with pytest.raises(ValueError):
        card_from_str("1X")


def test_card_point_values():
    assert [Card(Suit.HEARTS, r).point_value() for r in Rank] == [0, 0, 0, 10, 2, 3, 4, 11]
    # Trump uses the same table.
    assert Card(Suit.SPADES, Rank.JACK).point_value(Suit.SPADES) == 2
    assert Card(Suit.SPADES, Rank.NINE).point_value(Suit.SPADES) == 0


def test_seats_and_teams():
    assert next_seat(Seat.WEST) == Seat.NORTH
    assert rotation_from(Seat.SOUTH) == [Seat.SOUTH, Seat.WEST, Seat.NORTH, Seat.EAST]
    assert team_of(Seat.NORTH) == team_of(Seat.SOUTH) == Team.TEAM1
    assert team_of(Seat.EAST) == team_of(Seat.WEST) == Team.TEAM2


def test_deal_initial_conserves_cards():
    deck = generate_deck(random.Random(42))
    deal = deal_initial(deck, Seat.SOUTH)
    assert len(deal.talon) == 2
    assert deal.remainder == ()
    for seat in SEAT_ORDER:
        expected = 6 if seat == Seat.SOUTH else 8
        assert len(deal.hands[seat]) == expected
    all_cards = list(deal.talon)
    for h in deal.hands:
        all_cards.extend(h)
    assert len(all_cards) == 32
    assert set(all_cards) == set(make_deck_32())


def test_deal_starts_after_dealer():
    deck = make_deck_32()
    deal = deal_initial(deck, Seat.SOUTH)
    # West receives the first packet of each pass, the dealer the last.
    assert set(deal.hands[Seat.WEST]) == set(deck[0:4] + deck[16:20])
    assert set(deal.hands[Seat.SOUTH]) == set(deck[12:16] + deck[28:30])
    assert deal.talon == tuple(deck[30:32])


def test_deal_rejects_incomplete_deck():
    deck = make_deck_32()
    with pytest.raises(ValueError):
        deal_initial(deck[:-1])
    with pytest.raises(ValueError):
        deal_initial(deck[:-1] + deck[:1])


def test_scenario_trump_wins_trick():
    trick = _trick(
        (Seat.SOUTH, "10H"),
        (Seat.WEST, "AS"),
        (Seat.NORTH, "7H"),
        (Seat.EAST, "KH"),
    )
    assert evaluate_trick(trick, Suit.SPADES) == Seat.WEST
    assert score_trick(trick, Suit.SPADES) == 25


def test_highest_lead_suit_wins_without_trump():
    trick = _trick(
        (Seat.NORTH, "7H"),
        (Seat.EAST, "AD"),
        (Seat.SOUTH, "8S"),
        (Seat.WEST, "9H"),
    )
    # Off-suit cards never win, however high.
    assert evaluate_trick(trick, Suit.CLUBS) == Seat.WEST


def test_first_trump_falls_to_any_later_trump():
    trick = _trick(
        (Seat.NORTH, "AH"),
        (Seat.EAST, "AS"),
        (Seat.SOUTH, "7S"),
        (Seat.WEST, "9H"),
    )
    assert evaluate_trick(trick, Suit.SPADES) == Seat.SOUTH


def test_trumps_compare_by_rank_after_first_is_beaten():
    trick = _trick(
        (Seat.NORTH, "AH"),
        (Seat.EAST, "AS"),
        (Seat.SOUTH, "7S"),
        (Seat.WEST, "8S"),
    )
    assert evaluate_trick(trick, Suit.SPADES) == Seat.WEST

    trick = _trick(
        (Seat.NORTH, "AH"),
        (Seat.EAST, "9S"),
        (Seat.SOUTH, "KS"),
        (Seat.WEST, "QS"),
    )
    assert evaluate_trick(trick, Suit.SPADES) == Seat.SOUTH


def test_card_beats():
    seven_s, ace_h = card_from_str("7S"), card_from_str("AH")
    assert card_beats(seven_s, ace_h, Suit.SPADES, False)
    assert not card_beats(ace_h, seven_s, Suit.SPADES, False)
    assert card_beats(card_from_str("KH"), card_from_str("QH"), Suit.SPADES, False)
    assert not card_beats(card_from_str("AD"), card_from_str("7H"), Suit.SPADES, False)


def test_evaluate_empty_trick_raises():
    with pytest.raises(EmptyTrickError):
        evaluate_trick(Trick(), Suit.HEARTS)


def test_score_trick_upper_bound():
    rng = random.Random(5)
    deck = make_deck_32()
    for _ in range(200):
        cards = rng.sample(deck, 4)
        trick = Trick(cards=tuple(zip(SEAT_ORDER, cards)))
        assert 0 <= score_trick(trick, rng.choice(list(Suit))) <= 44


def test_can_win_has_no_side_effects():
    trick = _trick((Seat.NORTH, "9H"))
    assert can_win(trick, Seat.EAST, card_from_str("10H"), Suit.SPADES)
    assert not can_win(trick, Seat.EAST, card_from_str("8H"), Suit.SPADES)
    assert len(trick) == 1


def test_legal_plays_empty_trick():
    hand = _cards("10H", "7S", "AD")
    assert legal_plays(hand, Trick(), Suit.SPADES, GameConfig()) == hand


def test_legal_plays_must_follow_suit():
    hand = _cards("10H", "7S", "AH", "AD")
    trick = _trick((Seat.NORTH, "9H"))
    assert legal_plays(hand, trick, Suit.SPADES, GameConfig()) == _cards("10H", "AH")


def test_legal_plays_must_trump_when_void_and_trump_in_trick():
    hand = _cards("7S", "AD", "KS")
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "8S"))
    assert legal_plays(hand, trick, Suit.SPADES, GameConfig()) == _cards("7S", "KS")


def test_legal_plays_void_without_trump_in_trick():
    hand = _cards("7S", "AD", "KS")
    trick = _trick((Seat.NORTH, "9H"))
    assert legal_plays(hand, trick, Suit.SPADES, GameConfig()) == hand


def test_legal_plays_overtrump_option():
    hand = _cards("7S", "KS", "AD")
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "10S"))
    config = GameConfig(overtrump_required=True)
    assert legal_plays(hand, trick, Suit.SPADES, config) == _cards("KS")

    # No higher trump: any trump is still required.
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "AS"))
    assert legal_plays(hand, trick, Suit.SPADES, config) == _cards("7S", "KS")


def test_legal_plays_follow_suit_disabled():
    hand = _cards("10H", "7S", "AD")
    trick = _trick((Seat.NORTH, "9H"))
    config = GameConfig(must_follow_suit=False)
    assert legal_plays(hand, trick, Suit.SPADES, config) == hand


def test_legal_plays_follow_suit_disabled_holding_lead_suit_with_trump_in_trick():
    hand = _cards("10H", "7S", "AD")
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "8S"))
    config = GameConfig(must_follow_suit=False)
    # Still holds a heart, so the trump obligation does not apply.
    assert legal_plays(hand, trick, Suit.SPADES, config) == hand
    assert legal_plays(hand, trick, Suit.SPADES, GameConfig(must_follow_suit=False, overtrump_required=True)) == hand


def test_legal_plays_follow_suit_disabled_still_trumps_when_void():
    hand = _cards("7S", "KS", "AD")
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "10S"))
    assert legal_plays(hand, trick, Suit.SPADES, GameConfig(must_follow_suit=False)) == _cards("7S", "KS")
    config = GameConfig(must_follow_suit=False, overtrump_required=True)
    assert legal_plays(hand, trick, Suit.SPADES, config) == _cards("KS")


def test_legal_plays_trump_not_required_when_option_off():
    hand = _cards("7S", "KS", "AD")
    trick = _trick((Seat.NORTH, "9H"), (Seat.EAST, "8S"))
    config = GameConfig(must_trump_when_void=False)
    assert legal_plays(hand, trick, Suit.SPADES, config) == hand
    config = GameConfig(must_trump_when_void=False, overtrump_required=True)
    assert legal_plays(hand, trick, Suit.SPADES, config) == hand


def test_legal_plays_trump_lead_with_overtrump_option():
    hand = _cards("7S", "KS", "AD")
    trick = _trick((Seat.NORTH, "10S"))
    config = GameConfig(overtrump_required=True)
    # Following a trump lead is plain follow-suit; the overtrump rule is for void seats.
    assert legal_plays(hand, trick, Suit.SPADES, config) == _cards("7S", "KS")
    assert legal_plays(_cards("AD", "8C"), trick, Suit.SPADES, config) == _cards("AD", "8C")


def test_legal_plays_never_empty():
    rng = random.Random(11)
    deck = make_deck_32()
    for _ in range(300):
        cards = rng.sample(deck, 12)
        hand, played = cards[:8], cards[8:8 + rng.randint(1, 3)]
        trick = Trick(cards=tuple(zip(SEAT_ORDER, played)))
        trump = rng.choice(list(Suit))
        legal = legal_plays(hand, trick, trump, GameConfig(overtrump_required=rng.random() < 0.5))
        assert legal
        assert set(legal) <= set(hand)
