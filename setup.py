"""
SchemaCorpus setup.py — Package configuration.
"""

from setuptools import find_packages, setup

setup(
    name="schemacorpus",
    version="1.0.0",
    description="SchemaCorpus — Namespace-rooted folder tree and document cache for schema artifacts",
    packages=find_packages(include=["schemacorpus", "schemacorpus.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
)
