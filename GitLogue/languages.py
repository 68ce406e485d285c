#! /usr/bin/env python3

"""
Grammar table for the highlighter: maps file extensions to tree-sitter
grammar packages and the highlight queries they ship.
"""

import importlib
import logging
import os

from tree_sitter import Language

logger = logging.getLogger(__name__)

__all__ = ["LanguageSpec", "LANGUAGES", "languageForPath", "loadLanguage"]


##
## Grammar description.
##
## @var string name Display name
## @var string module Grammar package import name
## @var string function Name of the package function returning the language pointer
## @var list queries (module, attribute) pairs whose query texts are concatenated
##
class LanguageSpec:

    def __init__(self, name, module, function="language", queries=None):
        self.name = name
        self.module = module
        self.function = function
        self.queries = queries or [(module, "HIGHLIGHTS_QUERY")]

    def __repr__(self):
        return "LanguageSpec({!r})".format(self.name)


_python = LanguageSpec("python", "tree_sitter_python")
_javascript = LanguageSpec("javascript", "tree_sitter_javascript")
_typescript = LanguageSpec("typescript", "tree_sitter_typescript", "language_typescript",
                           [("tree_sitter_javascript", "HIGHLIGHTS_QUERY"),
                            ("tree_sitter_typescript", "HIGHLIGHTS_QUERY")])
_tsx = LanguageSpec("tsx", "tree_sitter_typescript", "language_tsx",
                    [("tree_sitter_javascript", "HIGHLIGHTS_QUERY"),
                     ("tree_sitter_javascript", "JSX_HIGHLIGHT_QUERY"),
                     ("tree_sitter_typescript", "HIGHLIGHTS_QUERY")])
_rust = LanguageSpec("rust", "tree_sitter_rust")
_go = LanguageSpec("go", "tree_sitter_go")
_c = LanguageSpec("c", "tree_sitter_c")
_cpp = LanguageSpec("cpp", "tree_sitter_cpp", queries=[("tree_sitter_c", "HIGHLIGHTS_QUERY"),
                                                        ("tree_sitter_cpp", "HIGHLIGHTS_QUERY")])
_java = LanguageSpec("java", "tree_sitter_java")
_ruby = LanguageSpec("ruby", "tree_sitter_ruby")
_bash = LanguageSpec("bash", "tree_sitter_bash")
_json = LanguageSpec("json", "tree_sitter_json")
_css = LanguageSpec("css", "tree_sitter_css")
_html = LanguageSpec("html", "tree_sitter_html")

# Extension (lower case, with dot) or exact file name to grammar
LANGUAGES = {
    ".py": _python, ".pyi": _python, ".pyw": _python,
    ".js": _javascript, ".mjs": _javascript, ".cjs": _javascript, ".jsx": _javascript,
    ".ts": _typescript, ".mts": _typescript, ".cts": _typescript,
    ".tsx": _tsx,
    ".rs": _rust,
    ".go": _go,
    ".c": _c, ".h": _c,
    ".cc": _cpp, ".cpp": _cpp, ".cxx": _cpp, ".hpp": _cpp, ".hh": _cpp, ".hxx": _cpp,
    ".java": _java,
    ".rb": _ruby, ".rake": _ruby, "Gemfile": _ruby, "Rakefile": _ruby,
    ".sh": _bash, ".bash": _bash, ".zsh": _bash, ".bashrc": _bash, ".zshrc": _bash,
    ".json": _json,
    ".css": _css,
    ".html": _html, ".htm": _html,
}


def languageForPath(path):
    name = os.path.basename(path)
    # dot files such as .bashrc have no extension of their own
    if name in LANGUAGES:
        return LANGUAGES[name]
    ext = os.path.splitext(name)[1].lower()
    return LANGUAGES.get(ext)


##
## Import the grammar package of a language and assemble its highlight query.
##
## @param LanguageSpec spec Grammar description
## @return tuple (Language, string query) or None if the grammar or its
##   queries are not installed
##
def loadLanguage(spec):
    try:
        module = importlib.import_module(spec.module)
        language = Language(getattr(module, spec.function)())
    except (ImportError, AttributeError, ValueError) as e:
        logger.debug( 'Grammar {} not available: {}'.format(spec.module, e) )
        return None

    parts = []
    for moduleName, attribute in spec.queries:
        try:
            query = getattr(importlib.import_module(moduleName), attribute, None)
        except ImportError:
            query = None
        if query:
            parts.append(query)
    if not parts:
        logger.debug( 'No highlight query shipped for {}'.format(spec.name) )
        return None

    return language, "\n".join(parts)
