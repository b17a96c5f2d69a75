"""
Units that transform data between a raw binary representation and a textual encoding of it.
"""
