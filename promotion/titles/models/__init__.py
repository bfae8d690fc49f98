from promotion.titles.models.title_model import Title, ChampionshipType
from promotion.titles.models.title_reign_model import TitleReign
