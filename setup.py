from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README.md for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="insetmap",
    version="0.1.0",

    # Descriptions
    description="Inset maps of study site locations from prepared GeoPandas data",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # Author information
    author="Steph Smith",
    author_email="steph.smith@unc.edu",

    # License
    license="MIT",

    # Package discovery
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),

    # Python version requirement
    python_requires=">=3.8",

    # Core dependencies
    install_requires=[
        "pandas>=1.3.0",
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "seaborn>=0.11.0",
        "geopandas>=0.10.0",
    ],

    # Optional dependencies for specific features
    extras_require={
        "yaml": [
            "pyyaml>=6.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "pyyaml>=6.0",
            "shapely>=1.8.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
        ],
    },

    # PyPI classifiers
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Scientific/Engineering :: Visualization",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Natural Language :: English",
    ],

    # Keywords for PyPI search
    keywords=[
        "inset map",
        "study sites",
        "cartography",
        "geopandas",
        "matplotlib",
        "scale bar",
        "marine biology",
    ],

    # Minimum setuptools version
    setup_requires=["setuptools>=45.0"],

    zip_safe=False,
)
