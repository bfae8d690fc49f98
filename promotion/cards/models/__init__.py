from promotion.cards.models.card_model import Card, CardSet
