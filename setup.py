from setuptools import setup, find_packages

setup(
    name="four-factors-wins",
    version="0.1.0",
    description="Box-score four factors and linear regression of team win totals",
    author="Ben Rosen",
    packages=find_packages(include=["four_factors", "four_factors.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
        "scipy>=1.10.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "four-factors=four_factors.main:main",
        ],
    },
)
