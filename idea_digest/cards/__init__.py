"""Chat cards."""

from idea_digest.cards.digest_card import build_digest_card, card_title

__all__ = [
    "build_digest_card",
    "card_title",
]
