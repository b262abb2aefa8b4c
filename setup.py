"""Package setup for dir_crawler."""

from setuptools import setup, find_packages

setup(
    name="dir-crawler",
    version="1.0.0",
    description="Recursive crawler that mirrors open web directory listings to local disk",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dir-crawler=dir_crawler.cli:main",
        ],
    },
)
