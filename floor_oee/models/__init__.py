"""
Floor OEE - Data Models

Engine dataclasses, raw input records and API response models.
"""
