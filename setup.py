from setuptools import setup, find_packages

setup(
    name="ecc_elgamal",
    version="0.1.0",
    description="Step-by-step elliptic curve arithmetic and ElGamal encryption over prime fields",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["ecc-elgamal=ecc_elgamal.cli:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
)
