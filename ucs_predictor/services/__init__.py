"""Application services layer.

Services coordinate the domain rules with infrastructure (the prediction call)
and own the form state. They should avoid UI concerns.
"""
