from promotion.teams.models.team_model import Team
