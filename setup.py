import setuptools

with open("README.md", "r") as fd:
    long_description = fd.read()

with open("VERSION", "r") as fd:
    version = fd.read().strip()

setuptools.setup(
    name="contextfree",
    version=version,
    author="Julien Castiaux",
    author_email="julien.castiaux@gmail.com",
    description="Context-free grammars, well-formed and Chomsky Normal Form transformations, CYK membership test.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Julien00859/contextfree",
    packages=setuptools.find_packages(exclude=["tests"]),
    python_requires=">=3.7",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development",
    ],
)
