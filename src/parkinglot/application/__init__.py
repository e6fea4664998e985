"""Application layer: DTOs, commands and the lot manager"""
