import os.path
from setuptools import find_packages, setup

# the directory containing this file
ROOT = os.path.dirname(__file__)

# the text of the README file
with open(os.path.join(ROOT, "README.md"), "r") as f:
    README = f.read()

setup(
    name="markdown-to-wordpress",
    version="0.1.0",
    description="Publish a manifest of Markdown files to WordPress pages",
    long_description=README,
    long_description_content_type="text/markdown",
    author="md2wp contributors",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.10",
    packages=find_packages(exclude=("tests",)),
    include_package_data=True,
    install_requires=[
        "cattrs",
        "markdown",
        "orjson",
        "pymdown-extensions",
        "requests",
        "typing_extensions; python_version < '3.12'",
    ],
    entry_points={
        "console_scripts": [
            "md2wp=md2wp.__main__:main",
        ],
    },
)
