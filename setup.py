from setuptools import setup, find_packages

setup(
    name="fluxlp",
    version="0.5.0",
    description="Flux Balance and Flux Variability Analysis of SBML models",
    long_description=("Translates SBML (fbc) metabolic network models into linear programs and runs "
                      "Flux Balance Analysis and parallel Flux Variability Analysis on them"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.8",
    packages=find_packages(include=["fluxlp", "fluxlp.*"]),
    install_requires=["cobra", "optlang", "swiglpk", "python-libsbml", "numpy", "scipy", "pandas"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Bio-Informatics"
    ],
    keywords=["metabolism", "constraint-based", "flux balance analysis", "flux variability analysis"],
    zip_safe=False,
)
