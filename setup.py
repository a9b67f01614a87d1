from setuptools import find_packages, setup

setup(
    name="pyWMO",
    version="0.1.0",
    author="daryl herzmann",
    author_email="akrherz@gmail.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "click",
        "pandas",
        "pydantic>=2",
        "shapely",
    ],
    extras_require={
        "test": ["mock", "pytest"],
    },
    entry_points={
        "console_scripts": ["wmo2json=pywmo.cli:main"],
    },
    url="https://github.com/akrherz/pyWMO/",
    download_url="",
    keywords=["weather", "hurricane", "wmo"],
    classifiers=[],
    license="Apache",
    description=(
        "Decoders for WMO/NOAA tropical text bulletins, recon observations "
        "and outlooks."
    ),
    include_package_data=True,
)
