import itertools
import re
import os

from setuptools import find_namespace_packages, setup

dependencies = ["biopython>=1.80", "marshmallow_dataclass>=8.6", "marshmallow>=3.18,<4", "methodtools"]

with open(os.path.join(os.path.dirname(__file__), "inscripta", "txcantor", "__init__.py")) as v_file:
    VERSION = re.compile(r""".*__version__ = ["'](.*?)['"]""", re.S).match(v_file.read()).group(1)

extra_dependencies = {
    "test": ["black", "flake8", "pytest", "pytest-cov"],
    "docs": [
        "Sphinx",
        "sphinx_rtd_theme",
        "sphinx-autoapi",
        "recommonmark",
    ],
}

all_dependencies = list(itertools.chain.from_iterable(extra_dependencies.values()))
extra_dependencies["all"] = all_dependencies

with open(os.path.join(os.path.dirname(__file__), "README.md"), "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="TxCantor",
    description="Transcript annotation models with sub-feature inference and refFlat reading and writing.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Inscripta, Inc.",
    test_suite="pytest",
    packages=find_namespace_packages(include=["inscripta.*"]),
    include_package_data=True,
    tests_require=extra_dependencies["test"],
    extras_require=extra_dependencies,
    install_requires=dependencies,
    version=VERSION,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
