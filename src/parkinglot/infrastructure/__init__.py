"""Infrastructure layer: settings, logging and line I/O"""
