#!/usr/bin/env python

import sys
import logging

# The following lines replace many standard library modules with versions that
# use gevent for concurrency. This is NOT required by mongotable, but lets
# pymongo share the event loop with the socketmap server.
from gevent import monkey
monkey.patch_all()


logging.basicConfig(level=logging.DEBUG, stream=sys.stdout)


def _open_dictionaries(args):
    from mongotable.dict import dict_open, DICT_FLAG_FOLD_FIX

    flags = DICT_FLAG_FOLD_FIX if args.fold else 0
    dictionaries = {}
    for mapping in args.maps:
        name, _, cfg_file = mapping.partition('=')
        dictionaries[name] = dict_open(cfg_file or name, dict_flags=flags)
    return dictionaries


def _start_edge(args, dictionaries):
    from mongotable.edge.socketmap import SocketmapEdge

    edge = SocketmapEdge((args.host, args.port), dictionaries)
    edge.start()
    return edge


def main():
    from gevent.event import Event
    from argparse import ArgumentParser

    parser = ArgumentParser(description='MongoDB socketmap lookup server.')
    parser.add_argument('maps', metavar='NAME=FILE', nargs='+',
                        help='Serve the table configured in FILE as map NAME')
    parser.add_argument('--host', dest='host', type=str, metavar='HOST',
                        default='127.0.0.1',
                        help='Listening interface for socketmap requests')
    parser.add_argument('--port', dest='port', type=int, metavar='PORT',
                        default=1099,
                        help='Listening port number for socketmap requests')
    parser.add_argument('--fold', dest='fold', action='store_true',
                        default=False,
                        help='Fold lookup keys to lower case')

    args = parser.parse_args()

    dictionaries = _open_dictionaries(args)
    edge = _start_edge(args, dictionaries)

    try:
        Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        edge.kill()
        for dictionary in dictionaries.values():
            dictionary.close()


if __name__ == '__main__':
    main()


# vim:et:fdm=marker:sts=4:sw=4:ts=4
