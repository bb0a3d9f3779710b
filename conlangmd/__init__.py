"""
# Conlang-Markdown

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Convert Conlang-Markdown (CLMD), a markup language for constructed-language documentation, to HTML.
"""
