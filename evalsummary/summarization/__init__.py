from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.factory import SummarizerFactory
from evalsummary.summarization.summarizer import Summarizer

__all__ = ["BaseSummarizer", "Summarizer", "SummarizerFactory"]
