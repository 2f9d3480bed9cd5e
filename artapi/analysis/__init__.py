from artapi.analysis.analyzer import ImageAnalyzer
from artapi.analysis.base import BaseAnalyzer
from artapi.analysis.factory import AnalyzerFactory
from artapi.analysis.models import AnalysisResult

__all__ = ["AnalysisResult", "AnalyzerFactory", "BaseAnalyzer", "ImageAnalyzer"]
