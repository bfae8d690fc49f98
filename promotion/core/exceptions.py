class PromotionError(Exception):
    """Base class for errors raised by the service layer."""


class EntityNotFoundError(PromotionError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class DuplicateEntityError(PromotionError):
    def __init__(self, entity: str, name: str):
        self.entity = entity
        self.name = name
        super().__init__(f"{entity} '{name}' already exists")


class BusinessRuleError(PromotionError):
    """A request that is well formed but breaks a game rule."""


class NarrationError(PromotionError):
    """The narration endpoint failed or answered with something unusable."""
