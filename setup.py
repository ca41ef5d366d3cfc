from setuptools import setup, find_packages

setup(
    name="dudleyscores",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*", "tools", "tools.*"]),
    python_requires=">=3.10",
    install_requires=[
        "playwright>=1.40",
        "beautifulsoup4>=4.12",
        "lxml>=4.9",
        "pydantic>=2.0",
        "python-dateutil>=2.8",
        "tenacity>=8.2",
        "python-dotenv>=1.0",
        "fastapi>=0.100",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
        ],
    },
    entry_points={
        "console_scripts": [
            "dudleyscores=dudleyscores.cli:main",
        ],
    },
    author="Aaron",
    description="Junior rugby league club fixtures/results scraper with cached JSON API",
)
