from pathlib import Path

from setuptools import find_packages, setup

NAME = "roefactura"
DESCRIPTION = "EN16931 and RO_CIUS compliance validation for Romanian e-invoices"

README = Path("README.md")
LONG_DESCRIPTION = README.read_text(encoding="utf-8") if README.exists() else DESCRIPTION

setup(
    name=NAME,
    version="0.1.0",
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"roefactura": ["schemas/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        "jsonschema>=4.18",
        "lxml>=4.9",
        "openpyxl>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "roefactura=roefactura.cli:main",
        ],
    },
)
