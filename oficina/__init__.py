# Oficina Manager - auto body shop management back-end
__version__ = "1.0.0"
