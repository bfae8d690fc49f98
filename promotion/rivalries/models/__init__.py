from promotion.rivalries.models.rivalry_model import Rivalry, HeatEvent, RivalryIntensity
