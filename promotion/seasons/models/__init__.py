from promotion.seasons.models.season_model import Season, DEFAULT_SHOWS_PER_PPV, is_premium_show
