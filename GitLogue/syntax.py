#! /usr/bin/env python3

"""
Syntax highlighter built on tree-sitter.

The highlighter turns a source text into a sorted list of HighlightSpan
elements. It is used twice per file change, once for the old and once for
the new text, so it keeps a single-slot cache: the last (source, tree) pair
is reused only when the next source is identical, and replaced wholesale
otherwise. No incremental edits are ever fed to the parser.
"""

import logging

from tree_sitter import Parser, Query, QueryCursor, QueryError

from .data_structures import HighlightSpan, TokenKind
from .languages import languageForPath, loadLanguage

logger = logging.getLogger(__name__)

__all__ = ["Highlighter", "tokenKindForCapture", "CAPTURE_NAMES"]

# Base capture name (first dotted component) to token kind
CAPTURE_NAMES = {
    "keyword": TokenKind.KEYWORD,
    "type": TokenKind.TYPE,
    "function": TokenKind.FUNCTION,
    "variable": TokenKind.VARIABLE,
    "string": TokenKind.STRING,
    "number": TokenKind.NUMBER,
    "comment": TokenKind.COMMENT,
    "operator": TokenKind.OPERATOR,
    "punctuation": TokenKind.PUNCTUATION,
    "constant": TokenKind.CONSTANT,
    "parameter": TokenKind.PARAMETER,
    "property": TokenKind.PROPERTY,
    "label": TokenKind.LABEL,

    # Synonyms
    "character": TokenKind.STRING,
    "boolean": TokenKind.CONSTANT,
    "namespace": TokenKind.TYPE,
    "module": TokenKind.TYPE,
    "constructor": TokenKind.TYPE,
    "method": TokenKind.FUNCTION,
    "macro": TokenKind.FUNCTION,
    "annotation": TokenKind.KEYWORD,
    "attribute": TokenKind.KEYWORD,
    "decorator": TokenKind.KEYWORD,
    "tag": TokenKind.TYPE,
    "escape": TokenKind.OPERATOR,
    "delimiter": TokenKind.PUNCTUATION,
    "special": TokenKind.OPERATOR,
    "field": TokenKind.PROPERTY,
    "enum": TokenKind.TYPE,
    "struct": TokenKind.TYPE,
    "class": TokenKind.TYPE,
    "interface": TokenKind.TYPE,
    "trait": TokenKind.TYPE,
    "regexp": TokenKind.STRING,
    "conditional": TokenKind.KEYWORD,
    "repeat": TokenKind.KEYWORD,
    "exception": TokenKind.KEYWORD,
    "include": TokenKind.KEYWORD,
    "storageclass": TokenKind.KEYWORD,
    "identifier": TokenKind.VARIABLE,
    "float": TokenKind.NUMBER,
    "text": TokenKind.STRING,
}


##
## Map a query capture name such as "keyword.function" to a token kind.
##
## @param string name Capture name
## @return TokenKind or None for unknown and internal names
##
def tokenKindForCapture(name):
    base = name.split(".", 1)[0]
    return CAPTURE_NAMES.get(base)


##
## Highlighter class.
##
## @class Highlighter
##
class Highlighter:

    def __init__(self):

        # @var Parser parser Parser bound to the selected language
        self.parser = None

        # @var Query query Compiled highlight query of the selected language
        self.query = None

        # @var string language Name of the selected language
        self.language = None

        # @var tuple cache Last (source, tree) pair
        self.cache = None

        # @var int parseCount Number of fresh parses, for instrumentation
        self.parseCount = 0


    ##
    ## Choose grammar and highlight query by file path. Never raises: an
    ## unsupported path, a missing grammar package or a query that does not
    ## compile clears the state and disables highlighting.
    ##
    ## @param string path File path
    ## @return bool True if highlighting is available
    ##
    def selectLanguage(self, path):

        self.clear()

        spec = languageForPath(path)
        if spec is None:
            return False

        loaded = loadLanguage(spec)
        if loaded is None:
            return False
        language, querySource = loaded

        try:
            query = Query(language, querySource)
        except (QueryError, ValueError) as e:
            logger.debug( 'Highlight query for {} does not compile: {}'.format(spec.name, e) )
            return False

        self.parser = Parser(language)
        self.query = query
        self.language = spec.name
        return True


    def clear(self):
        self.parser = None
        self.query = None
        self.language = None
        self.cache = None


    ##
    ## Parse source and collect highlight spans.
    ##
    ## @param string source Source text
    ## @return list HighlightSpan elements sorted by start byte
    ##
    def highlight(self, source):

        if self.query is None:
            return []

        if self.cache is not None and self.cache[0] == source:
            tree = self.cache[1]
        else:
            tree = self.parser.parse(source.encode("utf-8"))
            self.parseCount += 1
            self.cache = (source, tree)

        spans = []
        cursor = QueryCursor(self.query)
        for _pattern, captures in cursor.matches(tree.root_node):
            for name, nodes in captures.items():
                kind = tokenKindForCapture(name)
                if kind is None:
                    continue
                for node in nodes:
                    if node.start_byte < node.end_byte:
                        spans.append( HighlightSpan(start=node.start_byte, end=node.end_byte, kind=kind) )

        spans.sort(key=lambda span: span.start)
        return spans
