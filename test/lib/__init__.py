from .. import TestBase

__all__ = ['TestBase']
