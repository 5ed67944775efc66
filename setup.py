"""
Setup configuration for adcreative package.
"""

from setuptools import setup, find_packages

setup(
    name="adcreative",
    version="0.1.0",
    description="AI-assisted ad creative generation and campaign management",
    packages=find_packages(include=["adcreative", "adcreative.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "openai>=1.0",
        "logfire>=0.30",
        "click>=8.0",
        "Pillow>=10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "adcreative=adcreative.cli.main:cli",
        ],
    },
)
