from pathlib import Path
from setuptools import setup, find_packages

SHORT_DESCRIPTION = """Python package for planning crossfold splits for recommender evaluation."""

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="recfold",
    version="0.1.0",
    python_requires=">=3.8",
    packages=find_packages(exclude=["examples"]),
    install_requires=[
        "pandas>=2.1.4, ==2.*",
        "PyYAML>=6.0.1, ==6.*",
        "click>=8.0.0, ==8.*",
    ],
    extras_require={
        "doc": ["sphinx==4.*", "sphinx-rtd-theme==1.*"],
        "test": ["pytest>=6.2.4", "pytest-cov>=2.12.1"],
    },
    entry_points={"console_scripts": ["recfold-plan=recfold.cli:plan_crossfold"]},
    description=SHORT_DESCRIPTION,
    long_description=long_description,
    long_description_content_type="text/markdown",
)
