from setuptools import setup, find_packages
from pathlib import Path

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="epubwalk",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=["beautifulsoup4>=4.11", "rich>=12.0"],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["epubwalk=epubwalk.cli:main"]},
    long_description=long_description,
    long_description_content_type="text/markdown",
    description="Parse EPUB package documents, spines and NCX tables of contents",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
