"""
DocVault setup.py — Package configuration.
"""

from setuptools import find_packages, setup

setup(
    name="docvault",
    version="1.0.0",
    description="DocVault — document access control engine",
    packages=find_packages(include=["docvault", "docvault.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
