"""Setup configuration for codestream."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="codestream",
    version="0.1.0",
    author="Eve",
    description="Fenced code block detection for streamed assistant responses",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.9",
    install_requires=[
        "rich>=13.0",
        "pyyaml>=6.0",
        "pygments>=2.14.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
