from promotion.accounts.models.account_model import Account, AccountAchievement
