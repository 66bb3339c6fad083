from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="rrt_py",
    version="0.1.0",
    description="Goal-biased RRT planner for 2-D workspaces with polygonal obstacles",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    zip_safe=False,
    include_package_data=True,
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"rrt_py": ["examples/rrt/*.yaml"]},
    python_requires=">=3.10",
    install_requires=["numpy", "shapely>=2.0", "pyyaml", "tqdm", "matplotlib"],
    extras_require={"test": ["pytest"]},
)
