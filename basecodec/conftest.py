# Adds the versions of basecodec and its dependencies to the pytest header.
try:
    from pytest_astropy_header.display import (PYTEST_HEADER_MODULES,
                                               TESTED_VERSIONS)
except ImportError:
    pass
else:
    def pytest_configure(config):
        config.option.astropy_header = True

        # Dependencies whose versions are shown.
        PYTEST_HEADER_MODULES.clear()
        PYTEST_HEADER_MODULES['Astropy'] = 'astropy'
        PYTEST_HEADER_MODULES['Numpy'] = 'numpy'
        PYTEST_HEADER_MODULES['entrypoints'] = 'entrypoints'

        try:
            from .version import version
        except ImportError:  # Can happen in source checkout.
            version = 'from source'

        TESTED_VERSIONS['basecodec'] = version
