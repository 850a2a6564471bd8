from setuptools import setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="segmented-collections",
    version="1.0.0",
    description="Sorted lists stored as bounded sorted blocks, with value and positional queries backed by a lazily built summation tree.",
    packages=[
        "segmented_collections",
        "segmented_collections._src",
        "segmented_collections.sorted",
        "segmented_collections.sorted._src",
    ],
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest>=7"],
    },
    long_description = long_description,
    long_description_content_type = "text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
