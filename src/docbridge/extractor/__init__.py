"""Schema extractor: JSDoc-annotated source → contract store.

Modules
-------
scanner     Lexical scan into doc points and export points
jsdoc       ``/** */`` block parser
ranges      Source ranges + sorted interval index
extractor   ContractExtractor (association, normalization, warnings)
"""

from docbridge.extractor.extractor import ContractExtractor, ExtractionResult, extract_file

__all__ = ["ContractExtractor", "ExtractionResult", "extract_file"]
