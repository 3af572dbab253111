"""UCS Predictor: soil stabilisation strength form backed by a remote model."""

__version__ = "0.1.0"
