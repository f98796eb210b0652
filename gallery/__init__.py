"""
Gallery access core.

Decides which albums and photos a viewer may see and filters search
results accordingly.
"""
__version__ = "1.0.0"
