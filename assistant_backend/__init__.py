"""Assistant Backend - agent stream decoding, file extraction and request planning"""

__version__ = "1.0.0"
