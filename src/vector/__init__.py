"""
Semantic similarity engine - tokenization, embedding, scoring, clustering and labels.
"""

# Package initialization for vector module
from .index import IVectorStore, SimpleInMemoryVectorStore
from .types import VectorRecord, QueryResult, CardCluster
from .embeddings import IEmbeddingProvider, FeatureHashEmbedding, SentenceTransformerEmbedding, embed
from .similarity import cosine_similarity, vector_magnitude
from .clustering import cluster_cards
from .labels import generate_cluster_label
from .tokenizer import tokenize

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'VectorRecord',
    'QueryResult',
    'CardCluster',
    'IEmbeddingProvider',
    'FeatureHashEmbedding',
    'SentenceTransformerEmbedding',
    'embed',
    'cosine_similarity',
    'vector_magnitude',
    'cluster_cards',
    'generate_cluster_label',
    'tokenize'
]
