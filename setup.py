# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="gradfuncs",
    version="0.1.0",
    description="Differentiable objective, penalty and activation functions with closed-form gradients",
    author="Shaun Quezon",
    author_email="you@example.com",
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "numba",
        "sympy",
        "typing_extensions",
    ],
    extras_require={
        "test": ["pytest"],
    },
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gradfuncs*"]),
)
