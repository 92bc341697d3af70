from setuptools import setup, find_packages

setup(
    name='hostmeta',

    version='0.1.0',

    description='Fetch the identity and network configuration of a host from its cloud provider at boot',

    author='hostmeta contributors',

    license='Apache License (2.0)',

    classifiers=[
        'Development Status :: 3 - Alpha',

        'Topic :: System :: Boot',
        'Topic :: System :: Systems Administration',

        'Intended Audience :: System Administrators',

        'License :: OSI Approved :: Apache Software License',

        'Programming Language :: Python :: 3',
    ],

    keywords='cloud metadata ec2 gce azure digitalocean openstack packet vagrant',

    packages=find_packages(),

    package_data={
        'hostmeta.tests': ['fixtures/*'],
    },

    python_requires='>=3.6',

    install_requires=[
        'httplib2>=0.10.3',
        'paramiko>=2.3',
        'psutil>=5.0',
    ],

    extras_require={
        'test': [
            'google-api-python-client>=1.6',
            'mock',
            'pytest',
        ],
    },

    entry_points={
        'console_scripts': [
            'hostmeta = hostmeta.cli:main',
        ],
    },

    test_suite='hostmeta.tests'

)
