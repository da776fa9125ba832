from __future__ import annotations


class ConfigurationError(ValueError):
  """
  Raised when a run is configured with values the simulator refuses to
  accept: frame count outside [1, MAX_FRAMES], an empty reference string,
  a page number that is not a non-negative integer, or an unknown policy.
  """


class ParseError(ValueError):
  """
  Raised when reference-string text yields no usable page numbers.
  """
