"""Registers every event listener with the bus; imported once by the app."""
from promotion.accounts import listeners as account_listeners
from promotion.news import listeners as news_listeners
from promotion.notifications import listeners as notification_listeners

__all__ = ["account_listeners", "news_listeners", "notification_listeners"]
