"""Line searches and Newton-type solvers for smooth unconstrained and box-constrained optimization."""

__version__ = "0.1.0"