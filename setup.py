# setup.py
from setuptools import setup, find_packages

setup(
    name="site_spider",
    version="0.1.0",
    description="Потоки извлечения SiteSpider: хосты, сертификаты, иконки, комментарии и строки JavaScript",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_spider.report": ["templates/*.j2"]},
    install_requires=[
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "cryptography>=42",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": ["site-spider=site_spider.cli:cli"],
    },
    python_requires=">=3.11",
)
