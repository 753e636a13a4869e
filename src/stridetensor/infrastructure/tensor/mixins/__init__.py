"""
Focused mixins composing the concrete `Tensor`.
"""
