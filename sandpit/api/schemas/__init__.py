# This file marks the schemas package for API response models.
