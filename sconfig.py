import configparser
from collections import defaultdict
from pathlib import Path

from scplog import logger

DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_SECTION = "copy"


def get_config_param(config_filename, config_section, cast_to, param_name):
    try:
        return cast_to(config_section[param_name])
    except KeyError:
        logger.debug(f"{param_name} not found in {config_filename}.")
    except ValueError:
        logger.exception(f"{param_name} in {config_filename} is not a valid {cast_to.__name__}.")

    return None


def parse_config(config_filename=DEFAULT_CONFIG_FILENAME, section=DEFAULT_SECTION, params: list[tuple[str, type]] | None = None):
    return parse_config_with_defaults(config_filename=config_filename, section=section, params=[(item[0], item[1], None) for item in params or []])


def parse_config_with_defaults(config_filename=DEFAULT_CONFIG_FILENAME, section=DEFAULT_SECTION, params: list[tuple[str, type, object]] | None = None):
    """
    Merge command line values with the ones found in ``section`` of an INI file.

    Each param is ``(name, type, value)``; a value other than None wins over the
    file. Everything else is read from the file and cast to ``type``, or left
    as None when it is missing or malformed.
    """
    results = defaultdict(lambda: None)

    if not params:
        return results

    for param_name, _, param_default in params:
        results[param_name] = param_default

    config_path = Path(config_filename)

    if not config_path.is_file():
        logger.info(f"{config_filename} not found, using command line values only.")
        return results

    config = configparser.ConfigParser()
    config.read(config_path)

    if not config.has_section(section):
        logger.warning(f"No [{section}] section in {config_filename}.")
        return results

    import_section = config[section]

    for param_name, param_type, param_default in params:
        if param_default is not None:
            continue

        results[param_name] = get_config_param(config_filename=config_filename, config_section=import_section, cast_to=param_type, param_name=param_name)

    return results
