from .corpus import generate_corpus_files, generate_desktop_sources

__all__ = ["generate_corpus_files", "generate_desktop_sources"]
