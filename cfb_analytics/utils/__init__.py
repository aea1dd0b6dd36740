"""
Helpers around the ranking engine: display formatting, recompute
sequencing, and get_logger for applications embedding the engine.
"""
