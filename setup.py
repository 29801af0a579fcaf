import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="slabwriter",
    version="0.0.1",
    description="Collective parallel writes of rank contributions into shared HDF5 datasets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: The Unlicense (Unlicense)",
        "Operating System :: OS Independent",
    ],
    packages=setuptools.find_packages(include=["slabwriter", "slabwriter.*"]),
    package_data={"slabwriter.results": ["metadata.json"]},
    include_package_data=True,
    install_requires=[
        "numpy",
        "h5py",
        "pandas",
    ],
    extras_require={
        "mpi": ["mpi4py"],
        "test": ["pytest"],
    },
    python_requires=">=3.9"
)
