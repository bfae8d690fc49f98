from promotion.decks.models.deck_model import Deck, DeckCard
