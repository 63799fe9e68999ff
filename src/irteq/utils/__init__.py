from irteq.utils.histogram import SimpleBinCalculation

__all__ = ["SimpleBinCalculation"]
