from promotion.referees.models.referee_model import Referee
