from setuptools import setup, find_packages

setup(
  name = 'hjm',
  packages = find_packages(include=['hjm', 'hjm.*']),
  version = '0.1',
  license='Mozilla Public License Version 2.0',
  description = 'Gaussian HJM interest rate model operators for Monte Carlo simulation',
  author = 'shasa',
  keywords = ['finance', 'interest rates', 'hjm', 'monte carlo'],
  python_requires='>=3.10',
  install_requires=[
    'numpy',
    'scipy',
    'pandas',
    'prettytable',
      ],
  extras_require={
    'test': ['pytest'],
  },
  classifiers=[
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'Topic :: Office/Business :: Financial',
    'License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)',
    'Programming Language :: Python :: 3.10',
  ],
)
