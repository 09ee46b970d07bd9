#!/usr/bin/env python
"""
CMBTomo: travel-time perturbations from mantle structure and CMB topography
"""

import os
from setuptools import setup, find_packages



def readme():
	with open("README.md", "r") as f:
		return f.read()


here = os.path.abspath(os.path.dirname(__file__))
about = {}
with open(os.path.join(here, 'cmbtomo', "__version__.py")) as f:
	exec(f.read(), about)


pkg_metadata = dict(
		name="cmbtomo",
		version=about["__version__"],
		description="Travel-time perturbations due to 3-D mantle structure and core-mantle boundary topography",
		long_description=readme(),
		long_description_content_type="text/markdown",
		license="MIT",
		packages=find_packages(exclude=["tests", "tests.*"]),
		include_package_data=True,
		python_requires=">=3.8",
		keywords="Seismology, Travel Times, Core-Mantle Boundary, Ray Theory, Tomography",
		install_requires=['obspy>=1.1.0',
						  'numpy>=1.16.0',
						  'scipy>=1.3.0',
						  'joblib>=0.14'],
		extras_require={'test': ['pytest>=6.0']},
		classifiers=["License :: OSI Approved :: MIT License",
					 "Programming Language :: Python :: 3"]
		)

setup(**pkg_metadata)
