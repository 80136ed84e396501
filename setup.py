"""
Setup script for resume-export project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="resume-export",
    version="0.1.0",
    packages=find_packages(include=["resume_export", "resume_export.*", "pdf_service", "pdf_service.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "python-docx>=1.1",
        "playwright>=1.40",
        "requests>=2.31",
        "tenacity>=8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
        ],
    },
)
