from promotion.shows.models.show_type_model import ShowType
from promotion.shows.models.show_model import Show
