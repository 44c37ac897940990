# Copyright (c) 2021 Ian C. Good
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
#

"""Canonicalization of lookup keys before they are queried."""

__all__ = ['normalize_plus_address']


def normalize_plus_address(key):
    """Removes the *plus addressing* tag from an address, so that
    ``local+tag@domain`` becomes ``local@domain``. The span from the first
    ``+`` up to the first ``@`` is removed. Keys that lack either character,
    or whose first ``+`` follows the first ``@``, are returned unchanged.

    :param key: The lookup key, usually an email address.
    :type key: str
    :rtype: str

    """
    plus_i = key.find('+')
    at_i = key.find('@')
    if plus_i == -1 or at_i == -1 or plus_i > at_i:
        return key
    return key[:plus_i] + key[at_i:]


# vim:et:fdm=marker:sts=4:sw=4:ts=4
