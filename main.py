#!/usr/bin/env python3
"""
GovReady

Scans the local host for compliance with an OpenSCAP profile, as configured
by the GovReadyfile in the current directory, and generates a remediation
script from the results.
"""

import os
import sys
import shutil
import argparse
import traceback
from datetime import datetime
from govready.utils.config import Config
from govready.utils.debug_logger import DebugLogger
from govready.utils.dependencies import DependencyChecker
from govready.utils.exceptions import GovReadyError, UsageError
from govready.utils.lifecycle import ProcessLifecycle, LifecycleGuard
from govready.utils.progress import ProgressTracker
from govready.operations.environment_check import EnvironmentCheck
from govready.operations.package_installer import PackageInstaller, PACKAGES
from govready.operations.profile_lister import ProfileLister
from govready.operations.project_init import ProjectInitializer
from govready.operations.scan_pipeline import ScanPipeline

VERSION = "0.1.0"

HELP_FLAGS = ('-h', '--help')

USAGE = """usage: govready [--debug] [--config PATH] [--env-file PATH] <command> [args]

commands:
  version          print the version
  init             create a GovReadyfile and scan directory here
  test             check that this host is ready to scan
  install-oscap    ensure the OpenSCAP scanner is installed
  install-ssg      ensure the SCAP Security Guide content is installed
  install-epel     ensure the EPEL repository definition is installed
  profiles         list the profiles in the compliance content
  scan [profile]   scan this host with a profile (default: PROFILE from GovReadyfile)

Run 'govready <command> -h' for help on a command."""

COMMAND_USAGE = {
    'version': "usage: govready version\n\nPrint the version of govready.",
    'init': ("usage: govready init\n\n"
             "Create a default GovReadyfile and the scan directory in the current\n"
             "directory. An existing GovReadyfile is left untouched."),
    'test': ("usage: govready test\n\n"
             "Check that the evaluation engine, the compliance content and the\n"
             "project configuration are in place."),
    'install-oscap': "usage: govready install-oscap\n\nInstall openscap-scanner if it is missing.",
    'install-ssg': "usage: govready install-ssg\n\nInstall scap-security-guide if it is missing.",
    'install-epel': "usage: govready install-epel\n\nInstall epel-release if it is missing.",
    'profiles': "usage: govready profiles\n\nList the profiles available in the compliance content.",
    'scan': ("usage: govready scan [profile]\n\n"
             "Evaluate this host against profile (default: PROFILE from GovReadyfile).\n"
             "Results and an HTML report are written to SCAN_DIR; a fix script is\n"
             "written to the current directory."),
}


def parse_args(argv=None):
    """Parse command line arguments.

    Global options come before the command. Everything from the command on
    is returned untouched in args.tokens, including help flags.
    """
    parser = argparse.ArgumentParser(
        prog='govready',
        description='GovReady - compliance scanning of the local host with OpenSCAP',
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument('--env-file', help='Path to environment file (default: .env)')
    parser.add_argument('--config', help='Path to project file (default: GovReadyfile)')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    parser.add_argument('tokens', nargs=argparse.REMAINDER)
    args, unknown = parser.parse_known_args(argv)
    args.unknown = unknown
    return args


def print_usage(file=None):
    print(USAGE, file=file or sys.stderr)


def cmd_version(command, operand, config, lifecycle, debug_logger):
    print(f"govready {VERSION}")
    return 0


def cmd_init(command, operand, config, lifecycle, debug_logger):
    project_file, created = ProjectInitializer(config, debug_logger=debug_logger).execute()
    if created:
        print(f"✓ Created {project_file}")
    else:
        print(f"{project_file} already exists; leaving it unchanged.")
    return 0


def cmd_test(command, operand, config, lifecycle, debug_logger):
    results = EnvironmentCheck(config, debug_logger=debug_logger).execute()
    for name, passed, detail in results:
        print(f"[{' OK ' if passed else 'FAIL'}] {name}: {detail}")
    return 0 if all(passed for _, passed, _ in results) else 1


def cmd_install(command, operand, config, lifecycle, debug_logger):
    package = PACKAGES[command]
    if PackageInstaller(config, debug_logger=debug_logger).execute(package):
        print(f"✓ Installed {package}")
    else:
        print(f"{package} is already installed.")
    return 0


def cmd_profiles(command, operand, config, lifecycle, debug_logger):
    return ProfileLister(config, debug_logger=debug_logger).execute()


def cmd_scan(command, operand, config, lifecycle, debug_logger):
    # A failed compliance check is a result, not a tool error
    ScanPipeline(config, lifecycle, debug_logger=debug_logger).execute(operand)
    return 0


COMMANDS = {
    'version': cmd_version,
    'init': cmd_init,
    'test': cmd_test,
    'install-oscap': cmd_install,
    'install-ssg': cmd_install,
    'install-epel': cmd_install,
    'profiles': cmd_profiles,
    'scan': cmd_scan,
}


def dispatch(tokens, config, lifecycle, debug_logger=None, which=None):
    """Route command line tokens to a command.

    Args:
        tokens (list): Command followed by 0-2 operands
        config (Config): Runtime settings
        lifecycle (ProcessLifecycle): Process lifecycle instance
        debug_logger (DebugLogger, optional): Debug logger instance
        which (callable, optional): PATH lookup used for the dependency check

    Returns:
        int: Process exit status

    Raises:
        UsageError: If the tokens do not form a valid command
        GovReadyError: On any fatal condition raised by the command
    """
    if not 1 <= len(tokens) <= 3:
        raise UsageError("Expected a command followed by at most two arguments")

    command = tokens[0]
    operand = None

    if command not in COMMANDS:
        raise UsageError(f"Unknown command '{command}'")

    if len(tokens) > 1:
        if any(token in HELP_FLAGS for token in tokens[1:]):
            print(COMMAND_USAGE[command])
            return 0
        if command != 'scan' or len(tokens) != 2:
            raise UsageError(f"Too many arguments for '{command}'")
        operand = tokens[1]

    if debug_logger:
        debug_logger.log(f"Dispatching '{command}' (operand: {operand})")

    progress = ProgressTracker(enabled=sys.stderr.isatty())
    DependencyChecker(config.required_utilities, progress, debug_logger,
                      which or shutil.which).execute()

    return COMMANDS[command](command, operand, config, lifecycle, debug_logger)


def get_debug_log_path(config):
    """Return the debug log path, or None when file logging is off."""
    if not config.log_directory:
        return None
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return os.path.join(config.log_directory, f"govready_{timestamp}_debug.txt")


def main(argv=None):
    """Main entry point."""
    lifecycle = ProcessLifecycle()
    debug_logger = None

    # The guard is installed before any setup so a signal at any point
    # unwinds through the same exit path
    try:
        with LifecycleGuard(lifecycle):
            args = parse_args(argv)

            env_file = args.env_file if args.env_file else '.env'
            config = Config.from_env(env_file)

            # Override with command line arguments if provided
            if args.config:
                config.project_file = args.config
            if args.debug:
                config.debug = args.debug

            is_valid, error = config.validate()
            if not is_valid:
                print(f"ERROR: Configuration error: {error}", file=sys.stderr)
                return 1

            debug_logger = DebugLogger(get_debug_log_path(config), console_debug=config.debug)
            debug_logger.log(f"govready {VERSION}")
            debug_logger.log(f"Project file: {config.project_file}")
            debug_logger.log(f"Content: {config.content_path}")
            lifecycle.logger = debug_logger

            if args.unknown:
                raise UsageError(f"Unrecognized option: {' '.join(args.unknown)}")
            return dispatch(args.tokens, config, lifecycle, debug_logger)
    except UsageError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        print_usage()
        return e.exit_code
    except GovReadyError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        if debug_logger:
            debug_logger.log(f"FATAL ERROR: {e.message}")
        return e.exit_code
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        if debug_logger:
            debug_logger.log("INTERRUPTED: Operation cancelled by user")
        return 130
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        if debug_logger:
            debug_logger.log(f"FATAL ERROR: {e}")
            debug_logger.log(f"Traceback: {traceback.format_exc()}")
        return 1
    finally:
        if debug_logger:
            debug_logger.close()


if __name__ == "__main__":
    sys.exit(main())
