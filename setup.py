from setuptools import setup

setup(
    name="GitLogue",
    version="0.3.0",
    description="Replays git history as live typing in a terminal dashboard.",
    license="GPLv3",
    packages=["GitLogue"],
    scripts=["replay.py"],
    python_requires=">=3.9",
    install_requires=[
        "pygit2>=1.14",
        "tomlkit>=0.11",
        "rich",
        "textual>=0.40",
        "tree-sitter>=0.25",
        "tree-sitter-python",
        "tree-sitter-javascript",
        "tree-sitter-typescript",
        "tree-sitter-rust",
        "tree-sitter-go",
        "tree-sitter-c",
        "tree-sitter-cpp",
        "tree-sitter-java",
        "tree-sitter-ruby",
        "tree-sitter-bash",
        "tree-sitter-json",
        "tree-sitter-css",
        "tree-sitter-html",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
