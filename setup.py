"""
topoviz - Kafka Streams Topology Visualizer - Setup Configuration

Converts the text form of a Kafka Streams topology
(TopologyDescription.toString()) into Mermaid flowcharts and
GraphViz DOT diagrams.

License: MIT
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Core dependencies
core_deps = [
    # Configuration
    "pydantic>=2.11.9",
    # CLI
    "click>=8.1.7",
    # Terminal logging
    "rich>=14.1.0",
]

# Development dependencies
dev_deps = [
    # Testing
    "pytest>=8.4.1",
    "pytest-cov>=6.2.1",
    # Code quality
    "black>=25.0.0",
    "mypy>=1.13.0",
]

setup(
    name="topoviz",
    version="0.1.0",

    # Package description
    description="Convert Kafka Streams topology descriptions to Mermaid and GraphViz DOT diagrams",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # Package discovery
    packages=find_packages(where="src"),
    package_dir={"": "src"},

    # Python version requirement
    python_requires=">=3.9",

    # Dependencies
    install_requires=core_deps,

    # Optional dependencies (extras)
    extras_require={
        # Development: testing + code quality
        "dev": dev_deps,
        "test": ["pytest>=8.4.1", "pytest-cov>=6.2.1"],
    },

    # PyPI classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Documentation",
        "Topic :: Scientific/Engineering :: Visualization",
    ],

    keywords=[
        "kafka", "kafka-streams", "topology", "mermaid", "graphviz", "dot",
        "visualization", "diagram",
    ],

    license="MIT",

    include_package_data=True,
    zip_safe=False,

    entry_points={
        "console_scripts": [
            "topoviz=topoviz.cli:main",
        ],
    },
)
