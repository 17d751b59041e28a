"""
Help articles and their group associations.
"""

from src.kernel.articles.article_service import ArticleService
from src.kernel.articles.association_store import ArticleAssociationStore

__all__ = [
    "ArticleService",
    "ArticleAssociationStore",
]
