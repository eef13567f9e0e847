"""macOS SDK stubs that zig does not ship.

libiconv is linked by the Rust standard library on Apple targets; zig's bundled
libSystem stubs don't include it, so a text-based stub (.tbd) is dropped into
cargo's deps directory where the linker searches.
"""

LIBICONV_TBD_NAME = "libiconv.tbd"

LIBICONV_TBD = """\
--- !tapi-tbd
tbd-version:     4
targets:         [ x86_64-macos, x86_64-maccatalyst, arm64-macos, arm64-maccatalyst,
                   arm64e-macos, arm64e-maccatalyst ]
install-name:    '/usr/lib/libiconv.2.dylib'
current-version: 7
compatibility-version: 7
reexported-libraries:
  - targets:         [ x86_64-macos, x86_64-maccatalyst, arm64-macos, arm64-maccatalyst,
                       arm64e-macos, arm64e-maccatalyst ]
    libraries:       [ '/usr/lib/libcharset.1.dylib' ]
exports:
  - targets:         [ x86_64-macos, x86_64-maccatalyst, arm64-macos, arm64-maccatalyst,
                       arm64e-macos, arm64e-maccatalyst ]
    symbols:         [ ___iconv_2aliases, ___iconv_free_list, ___iconv_open_into,
                       ___iconvctl, __libiconv_version, _iconv, _iconv_canonicalize,
                       _iconv_close, _iconv_open, _iconv_set_relocation_prefix,
                       _iconvctl, _iconvlist, _libiconv_set_relocation_prefix ]
...
"""
