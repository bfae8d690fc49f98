from promotion.news.models.news_model import NewsItem, NewsCategory
