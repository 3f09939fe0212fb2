# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "Auto-SEO"


setup(
    name="auto-seo",
    version="0.1.0",
    description="Refresh static-site SEO metadata from Google daily trends",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(
        include=["seo_engine", "seo_engine.*", "metadata_engine", "metadata_engine.*", "fetchers", "fetchers.*"],
    ),
    include_package_data=True,
    install_requires=[
        "httpx>=0.26",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "respx>=0.20",
        ],
    },
    entry_points={
        "console_scripts": [
            "auto-seo-refresh = seo_engine.cli_entrypoints:refresh",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
