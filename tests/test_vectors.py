"""Test vectors for hashtree cross-implementation testing."""

# CHK of b"hello hashtree" as produced by hashtree-core
SAMPLE_PLAINTEXT = b"hello hashtree"
SAMPLE_DECRYPT_KEY_HEX = "880b78990f72e4ac5a452c4a691823e83ab94a31b8b6ae1fc4db6410c4504339"
SAMPLE_ENCRYPTED_HASH_HEX = "fe6064a7b5243aee66f8ddcd2218c38475206ff171328b0e7b39c69ecb888864"

# nhash for (SAMPLE_ENCRYPTED_HASH_HEX, SAMPLE_DECRYPT_KEY_HEX)
SAMPLE_NHASH = (
    "nhash1qqs0ucry576jgwhwvmudmnfzrrpcgafqdlchzv5tpeann357ewygseq9yzyqk7yepaewftz6g5ky56gcy05r4w22"
    "xxutdtslcndkgyxy2ppnj7999sn"
)

# BIP-173 valid bech32 strings
VALID_BECH32 = [
    "A12UEL5L",
    "a12uel5l",
    "an83characterlonghumanreadablepartthatcontainsthenumber1andtheexcludedcharactersbio1tt5tgs",
    "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw",
    "11" + "q" * 82 + "c8247j",
    "split1checkupstagehandshakeupstreamerranterredcaperred2y9e3w",
    "?1ezyfcl",
]

# BIP-173 invalid bech32 strings
INVALID_BECH32 = {
    "hrp_char_out_of_range": "\x201nwldj5",
    "no_separator": "pzry9x0s0muk",
    "empty_hrp": "1pzry9x0s0muk",
    "invalid_data_char": "x1b4n0q5v",
    "checksum_too_short": "li1dgmt3",
    "invalid_checksum_char": "de1lg7wt\xff",
    "checksum_from_uppercase_hrp": "A1G7SGD8",
    "empty_hrp_short": "10a06t8",
    "empty_hrp_upper": "1qzzfhee",
    "mixed_case": "A12uEL5L",
}
