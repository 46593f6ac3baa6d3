import os

from setuptools import find_packages, setup


def read_package_variable(key, filename="__init__.py"):
    """Read the value of a variable from the package without importing."""
    module_path = os.path.join("src/meshwire", filename)
    with open(module_path) as module:
        for line in module:
            parts = line.strip().split(" ", 2)
            if parts[:-1] == [key, "="]:
                return parts[-1].strip("'").strip('"')
    return None


setup(
    name="meshwire",
    version=read_package_variable("VERSION"),
    description="Meshwire: declarative resolvers and extension lookup for GraphQL gateways",
    license="MIT",
    keywords="graphql gateway resolvers stitching plugins python",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["test", "test.*"]),
    include_package_data=True,
    entry_points={
        "console_scripts": ["meshwire=meshwire.cli:main"],
    },
    install_requires=[
        "aiofiles>=22.1",
        "cachetools>=5.0",
        "click>=7",
        "flupy>=1.0",
        "graphql-core>=3.2,<3.3",
        "pyee>=9",
        "typing-extensions",
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio", "pytest-cov"],
        "dev": ["pylint", "black", "pre-commit"],
    },
)
