"""
Target-language support: naming rules and type mapping per language.
"""
