# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="pera",
    version="0.1.0",
    description="Prefix-notation scripting language with a trampolined tree-walking evaluator",
    packages=find_namespace_packages(include=["pera", "pera.*", "pera_lsp", "pera_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
