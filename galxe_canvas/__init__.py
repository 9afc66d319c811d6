"""
Galxe canvas service.

Answers a chat widget's canvas requests by checking a wallet address against
Galxe campaigns, either one campaign or every campaign of a space.
"""

__version__ = "0.1.0"
