"""Bio-Rad PIC conversion, mouse-driven camera interactors and sample data modules."""

__version__ = "0.1.0"
__all__ = ["events", "modules", "navigation", "pic2dx", "picfile", "simplezoom"]