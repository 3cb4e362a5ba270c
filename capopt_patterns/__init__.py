"""
CapOpt pattern service: industry framework assignment and canvas pattern analysis
"""
__version__ = "1.0.0"
