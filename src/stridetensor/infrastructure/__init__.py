"""
NumPy-backed implementation of the stridetensor engine.

Subpackages
-----------
- storage  : flat `ArrayStorage` buffers
- numeric  : element-type capabilities (`FloatNumeric`, `DoubleNumeric`)
- random   : explicit `RandomGenerator` handles
- tensor   : the strided `Tensor`, its engines and mixins
- ops      : external CPU kernels (BLAS-style products, 2D correlation)
- encoding : JSON-safe payloads
"""
