# This file is part of the gpkgtiles project.
# Copyright (C) 2026 The gpkgtiles authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import optparse
import sys

from gpkgtiles.config.loader import load_configuration, store_from_config, ConfigurationError
from gpkgtiles.store import StoreError
from gpkgtiles.version import version


_log_handler = None


def setup_logging(level=logging.INFO, format=None):
    global _log_handler
    gpkgtiles_log = logging.getLogger('gpkgtiles')
    gpkgtiles_log.setLevel(level)
    if _log_handler is not None:
        gpkgtiles_log.removeHandler(_log_handler)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    if not format:
        format = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format)
    ch.setFormatter(formatter)
    gpkgtiles_log.addHandler(ch)
    _log_handler = ch


def base_option_parser(usage):
    parser = optparse.OptionParser(usage)
    parser.add_option("-f", "--config", dest="config_file", default=None,
                      help="YAML configuration with store and metadata options")
    parser.add_option("--debug", default=False, action="store_true", dest="debug",
                      help="Enable debug logging")
    parser.add_option("-q", "--quiet", default=False, action="store_true", dest="quiet",
                      help="Only log warnings and errors")
    return parser


def parse_args(parser, args, num_args):
    """
    Parse `args` (program name first) and check the number of
    positional arguments. Exits with 1 on usage errors.
    """
    options, args = parser.parse_args(args)
    if len(args) != num_args + 1:
        parser.print_help()
        print("\nERROR: wrong number of arguments", file=sys.stdout)
        sys.exit(1)

    if options.debug:
        setup_logging(level=logging.DEBUG)
    elif options.quiet:
        setup_logging(level=logging.WARNING)
    else:
        setup_logging()
    return options, args[1:]


def parse_tile_coord(parser, args):
    try:
        return tuple(int(a) for a in args)
    except ValueError:
        parser.print_help()
        print("\nERROR: tile coordinates must be integers: %s" % ' '.join(args), file=sys.stdout)
        sys.exit(1)


def parse_bounds(parser, value):
    try:
        bounds = [float(v) for v in value.split(',')]
    except ValueError:
        bounds = []
    if len(bounds) != 4:
        parser.print_help()
        print("\nERROR: bounds must be four comma separated numbers: %s" % value, file=sys.stdout)
        sys.exit(1)
    return bounds


def open_store(options, gpkg_file):
    try:
        conf = load_configuration(options.config_file)
    except ConfigurationError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)
    return conf, store_from_config(gpkg_file, conf)


def init_command(args):
    parser = base_option_parser("usage: %prog init [options] GPKG")
    options, args = parse_args(parser, args, 1)
    conf, store = open_store(options, args[0])
    try:
        with store:
            store.ensure_schema()
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)
    if not store.ok:
        sys.exit(2)


def update_command(args):
    parser = base_option_parser("usage: %prog update [options] GPKG")
    parser.add_option("--name", dest="name", default=None,
                      help="Name of the tile set [tiles]")
    parser.add_option("--description", dest="description", default=None,
                      help="Description of the tile set")
    parser.add_option("--bounds", dest="bounds", default=None,
                      help="Bounds in degrees as west,south,east,north [-180,-85,180,85]")
    parser.add_option("--minzoom", dest="minzoom", type="int", default=None,
                      help="Minimum zoom level [0]")
    parser.add_option("--maxzoom", dest="maxzoom", type="int", default=None,
                      help="Maximum zoom level [19]")
    options, args = parse_args(parser, args, 1)

    conf, store = open_store(options, args[0])
    metadata = dict(conf.metadata)
    for key in ('name', 'description', 'minzoom', 'maxzoom'):
        value = getattr(options, key)
        if value is not None:
            metadata[key] = value
    if options.bounds is not None:
        metadata['bounds'] = parse_bounds(parser, options.bounds)

    try:
        with store:
            md = store.set_metadata(metadata)
    except ValueError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(1)
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)

    if not store.ok:
        sys.exit(2)
    print_metadata(md)


def save_command(args):
    parser = base_option_parser("usage: %prog save [options] GPKG X Y Z IMAGE_FILE")
    options, args = parse_args(parser, args, 5)
    x, y, z = parse_tile_coord(parser, args[1:4])
    try:
        with open(args[4], 'rb') as f:
            image = f.read()
    except OSError as ex:
        print("ERROR: unable to read %s: %s" % (args[4], ex), file=sys.stdout)
        sys.exit(2)

    conf, store = open_store(options, args[0])
    try:
        with store:
            saved = store.save_tile(x, y, z, image)
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)
    if not saved:
        sys.exit(2)


def get_command(args):
    parser = base_option_parser("usage: %prog get [options] GPKG X Y Z")
    parser.add_option("-o", "--output", dest="output", default=None,
                      help="Write the tile to this file instead of stdout")
    options, args = parse_args(parser, args, 4)
    x, y, z = parse_tile_coord(parser, args[1:4])

    conf, store = open_store(options, args[0])
    try:
        with store:
            data = store.find_tile(x, y, z)
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)

    if data is None:
        print("ERROR: tile %d/%d/%d not found" % (z, x, y), file=sys.stderr)
        sys.exit(2)

    if options.output:
        try:
            with open(options.output, 'wb') as f:
                f.write(data)
        except OSError as ex:
            print("ERROR: unable to write %s: %s" % (options.output, ex), file=sys.stdout)
            sys.exit(2)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


def delete_command(args):
    parser = base_option_parser("usage: %prog delete [options] GPKG X Y Z")
    options, args = parse_args(parser, args, 4)
    x, y, z = parse_tile_coord(parser, args[1:4])

    conf, store = open_store(options, args[0])
    try:
        with store:
            deleted = store.delete_tile(x, y, z)
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)
    if not deleted:
        sys.exit(2)


def info_command(args):
    parser = base_option_parser("usage: %prog info [options] GPKG")
    options, args = parse_args(parser, args, 1)

    conf, store = open_store(options, args[0])
    try:
        with store:
            md = store.get_metadata()
            count = store.tile_count()
    except StoreError as ex:
        print("ERROR: %s" % ex, file=sys.stdout)
        sys.exit(2)

    if md is None:
        print("no tile set metadata in %s" % args[0])
    else:
        print_metadata(md)
    print("tiles: %d" % count)


def print_metadata(md):
    print("name: %s" % md.name)
    print("description: %s" % md.description)
    if md.bounds is not None:
        print("bounds: %s" % ','.join('%.6f' % b for b in md.bounds))
    print("bounds_meters: %s" % ','.join('%.2f' % b for b in md.bounds_meters))
    print("last_change: %s" % md.last_change)
    print("minzoom: %s" % md.minzoom)
    print("maxzoom: %s" % md.maxzoom)


commands = {
    'init': {
        'func': init_command,
        'help': 'Create the GeoPackage tables.',
    },
    'update': {
        'func': update_command,
        'help': 'Replace the tile set metadata.',
    },
    'save': {
        'func': save_command,
        'help': 'Store a single tile.',
    },
    'get': {
        'func': get_command,
        'help': 'Read a single tile.',
    },
    'delete': {
        'func': delete_command,
        'help': 'Remove a single tile.',
    },
    'info': {
        'func': info_command,
        'help': 'Show the tile set metadata.',
    },
}


class NonStrictOptionParser(optparse.OptionParser):
    def _process_args(self, largs, rargs, values):
        while rargs:
            arg = rargs[0]
            # We handle bare "--" explicitly, and bare "-" is handled by the
            # standard arg handler since the short arg case ensures that the
            # len of the opt string is greater than 1.
            try:
                if arg == "--":
                    del rargs[0]
                    return
                elif arg[0:2] == "--":
                    # process a single long option (possibly with value(s))
                    self._process_long_opt(rargs, values)
                elif arg[:1] == "-" and len(arg) > 1:
                    # process a cluster of short options (possibly with
                    # value(s) for the last one only)
                    self._process_short_opts(rargs, values)
                elif self.allow_interspersed_args:
                    largs.append(arg)
                    del rargs[0]
                else:
                    return
            except optparse.BadOptionError:
                largs.append(arg)


def print_items(data, title='Commands'):
    name_len = max(len(name) for name in data)

    if title:
        print('%s:' % (title, ), file=sys.stdout)
    for name, item in sorted(data.items()):
        help = item.get('help', '')
        name = ('%%-%ds' % name_len) % name
        if help:
            help = '  ' + help
        print('  %s%s' % (name, help), file=sys.stdout)


def main(argv=None):
    if argv is None:
        argv = sys.argv
    parser = NonStrictOptionParser("usage: %prog COMMAND [options]",
                                   add_help_option=False)
    options, args = parser.parse_args(argv[1:])

    if len(args) < 1 or args[0] in ('--help', '-h'):
        parser.print_help()
        print()
        print_items(commands)
        sys.exit(1)

    if len(args) == 1 and args[0] == '--version':
        print('gpkgtiles ' + version)
        sys.exit(1)

    command = args[0]
    if command not in commands:
        parser.print_help()
        print()
        print_items(commands)
        print('\nERROR: unknown command %s' % (command,), file=sys.stdout)
        sys.exit(1)

    args = argv[0:1] + argv[2:]
    commands[command]['func'](args)


if __name__ == '__main__':
    main()
