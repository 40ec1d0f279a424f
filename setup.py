from setuptools import setup, find_packages

setup(
    name="densematrix",
    version="0.1.0",
    description="Dense matrices over exact rational and floating point numbers",
    long_description=("Generic dense matrix package offering construction, element, row and column access, "
                      "arithmetic and Gaussian elimination (RREF, determinant, rank, linear independence, "
                      "linear system solving) over float, int, Fraction and an exact Rational type"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.8",
    packages=find_packages(include=["densematrix", "densematrix.*"]),
    install_requires=["numpy"],
    extras_require={
        "test": ["pytest", "scipy"],
    },
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["matrix", "linear algebra", "gaussian elimination", "rational", "determinant"],
    zip_safe=False,
)
