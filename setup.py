#!/usr/bin/env python
import os
from setuptools import setup, find_packages

here = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(here, "README.md"), "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open(os.path.join(here, "VERSION"), "r", encoding="utf-8") as fh:
    version = fh.read().strip()

setup(name='gpbo',
      version=version,
      author='Emmanuel Vazquez',
      author_email='emmanuel.vazquez@centralesupelec.fr',
      description='GPbo: Bayesian optimization with Gaussian and Student-t process surrogates',
      long_description=long_description,
      long_description_content_type="text/markdown",
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
          "Operating System :: OS Independent",
      ],
      packages=find_packages(include=['gpbo', 'gpbo.*']),
      license='GPLv3',
      install_requires=[
             "numpy",
             "scipy>=1.9.0",
             "matplotlib"
         ],
      extras_require={
          "test": ["pytest"],
      },
      python_requires=">=3.8",
      )
