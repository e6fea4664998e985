"""Domain layer: lot aggregate, value objects and events"""
