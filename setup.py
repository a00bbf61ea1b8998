"""Setup script for Code Complexity Analyzer"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="code-complexity-analyzer",
    version="0.1.0",
    description="Cyclomatic complexity, Halstead volume, maintainability and duplication report",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Quality Assurance",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.20.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-java>=0.23.0",
        "tree-sitter-python>=0.23.0",
        "typer>=0.9.0,<0.26",
        "click>=8.0.0",
        "rich>=13.0.0",
        "starlette>=0.27.0",
        "python-multipart>=0.0.6",
        "uvicorn>=0.20.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "codecomplexity=codecomplexity.cli:main",
        ],
    },
    keywords="code-quality static-analysis cyclomatic-complexity halstead maintainability duplication",
)
