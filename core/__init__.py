"""
Core business logic modules for the YouTube MP3 Converter

This package contains the core functionality modules:
- extract.py: video reference → video ID
- convert.py: video ID → RapidAPI conversion request → ConversionResult
- result.py: the ConversionResult model and failure taxonomy
"""
