"""Bela game engine: rules, bots and move analysis."""

__version__ = "0.1.0"

from .config import GameConfig
from .deck import Card, Rank, Suit, card_from_str, card_to_str, generate_deck, make_deck_32
from .deal import Deal, Seat, Team, deal_initial, next_seat, team_of
from .errors import (
    BelaError,
    ConfigError,
    EmptyTrickError,
    IllegalBidError,
    IllegalMoveError,
    InvariantError,
    WrongPhaseError,
    WrongTurnError,
)
from .state import (
    Declaration,
    DeclarationType,
    EventType,
    GameEvent,
    GameState,
    Phase,
    Trick,
    TrumpCall,
    check_invariants,
)
from .play import card_beats, can_win, evaluate_trick, legal_moves, score_trick
from .declarations import detect_declarations
from .bidding import apply_bid, apply_dealer_choice, apply_pass, available_bids
from .scoring import HandResult, is_game_over, score_hand
from .game import apply_move, create_initial_state, deal_next_hand, finish_hand, new_match
from .bots import AdvancedBot, BeginnerBot, BotMove, Strategy, create_bot
from .analysis import (
    analyze_game,
    compute_game_score,
    generate_report,
    get_hint,
    grade_decision,
)
