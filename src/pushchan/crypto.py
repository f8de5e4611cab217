"""
Symmetric decryption for encrypted channels, using PyNaCl.
"""
import base64
import binascii

import nacl.exceptions
import nacl.secret

from .errors import DecryptionFailure, SecretBoxOpenerRemoved


class SecretBoxOpener:
    """ Decrypt XSalsa20-Poly1305 secret boxes with a channel's shared
        secret. The opener holds its copy of the key in a mutable buffer
        that :func:`clear_key` overwrites, and a single
        :class:`nacl.secret.SecretBox` built from it that :func:`clear_key`
        drops; the raw key is never handed back out. Once cleared the
        opener cannot be used again.

        PyNaCl keeps its own immutable copy of the key inside the
        SecretBox, and the caller's *key* argument is not touched, so
        clearing guarantees the opener is unusable but cannot scrub every
        copy of the key bytes from process memory.
    """

    def __init__(self, key):

        if len(key) != nacl.secret.SecretBox.KEY_SIZE:
            raise ValueError("key must be %d bytes, not %d" % (nacl.secret.SecretBox.KEY_SIZE, len(key)))

        self._key = bytearray(key)
        self._box = nacl.secret.SecretBox(bytes(self._key))
        self.cleared = False


    def __repr__(self):
        if self.cleared:
            return 'SecretBoxOpener(<cleared>)'
        return 'SecretBoxOpener(<key>)'


    def open(self, ciphertext, nonce):
        """ Return the plaintext bytes for *ciphertext* sealed with *nonce*.
        """

        box = self._box
        if self.cleared or box is None:
            raise SecretBoxOpenerRemoved('the key for this opener has been cleared')

        try:
            return box.decrypt(ciphertext, nonce)
        except nacl.exceptions.CryptoError as e:
            raise DecryptionFailure('ciphertext failed authentication') from e


    def open_message(self, envelope):
        """ Decrypt an encrypted event, whose *envelope* is a mapping with
            base64-encoded 'nonce' and 'ciphertext' fields. Returns the
            plaintext as a string.
        """

        try:
            nonce = base64.b64decode(envelope['nonce'], validate=True)
            ciphertext = base64.b64decode(envelope['ciphertext'], validate=True)
        except (KeyError, TypeError, binascii.Error, ValueError) as e:
            raise DecryptionFailure('encrypted event is missing a valid nonce or ciphertext') from e

        if len(nonce) != nacl.secret.SecretBox.NONCE_SIZE:
            raise DecryptionFailure("nonce must be %d bytes, not %d" % (nacl.secret.SecretBox.NONCE_SIZE, len(nonce)))

        plaintext = self.open(ciphertext, nonce)

        try:
            return plaintext.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecryptionFailure('decrypted event is not valid UTF-8') from e


    def clear_key(self):
        """ Overwrite the key bytes and mark the opener unusable.
        """

        self._box = None

        key = self._key
        for index in range(len(key)):
            key[index] = 0

        self.cleared = True


# end of class SecretBoxOpener


def seal(plaintext, key, nonce=None):
    """ Encrypt *plaintext* with *key*, returning the base64 envelope that
        :func:`SecretBoxOpener.open_message` expects. This is the operation
        the server performs; it is here for completeness, and for testing.
    """

    if isinstance(plaintext, str):
        plaintext = plaintext.encode('utf-8')

    box = nacl.secret.SecretBox(bytes(key))
    encrypted = box.encrypt(plaintext, nonce)

    envelope = dict()
    envelope['nonce'] = base64.b64encode(encrypted.nonce).decode()
    envelope['ciphertext'] = base64.b64encode(encrypted.ciphertext).decode()
    return envelope


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
