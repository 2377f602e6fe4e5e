"""Domain layer for the Freelance Market backend.

Contains the pure payment and deposit rules and the result type they return.
This layer has no dependencies on infrastructure concerns.
"""
