# Detection Package
from detection.signals import ClientSignal
from detection.rules import Signal, HeaderRule, HEADER_RULES
from detection.verdict import DetectionVerdict
from detection.classifier import RequestClassifier

__all__ = ["ClientSignal", "Signal", "HeaderRule", "HEADER_RULES", "DetectionVerdict", "RequestClassifier"]
