"""
Setup script for nanoleaf-stream library.
"""

from setuptools import setup, find_packages

# Read the README file
def read_readme():
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()

# Read requirements
def read_requirements():
    with open("requirements.txt", "r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="nanoleaf-stream",
    version="0.1.0",
    description="Discover Nanoleaf panel arrays and stream colours to them over the external control protocol.",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nanoleaf", "nanoleaf.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Home Automation",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.11",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-asyncio>=0.23",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "nanoleaf-stream=nanoleaf.cli:main",
        ],
    },
    include_package_data=True,
    package_data={
        "nanoleaf": ["py.typed"],
    },
    zip_safe=False,
)
