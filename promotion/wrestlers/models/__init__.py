from promotion.wrestlers.models.wrestler_model import Wrestler, WrestlerTier, Gender
