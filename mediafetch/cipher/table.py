"""
Known cipher programs, keyed by the player version they were taken from.

Each value is `"<sts> <ops>"`: the player's timestamp followed by the opcode
sequence that undoes its signature scrambling.
"""

from types import MappingProxyType

_CIPHERS = {
    "vflNzKG7n": "135957536242 s3 r s2 r s1 r w67",
    "vfllMCQWM": "136089118952 s2 w46 r w27 s2 w43 s2 r",
    "vflJv8FA8": "136304655662 s1 w51 w52 r",
    "vflR_cX32": "1580 s2 w64 s3",
    "vflveGye9": "1582 w21 w3 s1 r w44 w36 r w41 s1",
    "vflj7Fxxt": "1583 r s3 w3 r w17 r w41 r s2",
    "vfltM3odl": "1584 w60 s1 w49 r s1 w7 r s2 r",
    "vflDG7-a-": "1586 w52 r s3 w21 r s3 r",
    "vfl39KBj1": "1586 w52 r s3 w21 r s3 r",
    "vflmOfVEX": "1586 w52 r s3 w21 r s3 r",
    "vflJwJuHJ": "1588 r s3 w19 r s2",
    "vfl_ymO4Z": "1588 r s3 w19 r s2",
    "vfl26ng3K": "15888 r s2 r",
    "vflcaqGO8": "15897 w24 w53 s2 w31 w4",
    "vflQw-fB4": "15902 s2 r s3 w9 s3 w43 s3 r w23",
    "vflSAFCP9": "15904 r s2 w17 w61 r s1 w7 s1",
    "vflART1Nf": "15908 s3 r w63 s2 r s1",
    "vflLC8JvQ": "15910 w34 w29 w9 r w39 w24",
    "vflm_D8eE": "15916 s2 r w39 w55 w49 s3 w56 w2",
    "vflTWC9KW": "15917 r s2 w65 r",
    "vflRFcHMl": "15921 s3 w24 r",
    "vflM2EmfJ": "15920 w10 r s1 w45 s2 r s3 w50 r",
    "vflz8giW0": "15919 s2 w18 s3",
    "vfl_wGgYV": "15923 w60 s1 r s1 w9 s3 r s3 r",
    "vfl1HXdPb": "15926 w52 r w18 r s1 w44 w51 r s1",
    "vflkn6DAl": "15932 w39 s2 w57 s2 w23 w35 s2",
    "vfl2LOvBh": "15933 w34 w19 r s1 r s3 w24 r",
    "vfl-bxy_m": "15936 w48 s3 w37 s2",
    "vflZK4ZYR": "15938 w19 w68 s1",
    "vflh9ybst": "15936 w48 s3 w37 s2",
    "vflapUV9V": "15943 s2 w53 r w59 r s2 w41 s3",
    "vflg0g8PQ": "15944 w36 s3 r s2",
    "vflHOr_nV": "15947 w58 r w50 s1 r s1 r w11 s3",
    "vfluy6kdb": "15953 r w12 w32 r w34 s3 w35 w42 s2",
    "vflkuzxcs": "15958 w22 w43 s3 r s1 w43",
    "vflGNjMhJ": "15956 w43 w2 w54 r w8 s1",
    "vfldJ8xgI": "15964 w11 r w29 s1 r s3",
    "vfl79wBKW": "15966 s3 r s1 r s3 r s3 w59 s2",
    "vflg3FZfr": "15969 r s3 w66 w10 w43 s2",
    "vflUKrNpT": "15973 r s2 r w63 r",
    "vfldWnjUz": "15976 r s1 w68",
    "vflP7iCEe": "15981 w7 w37 r s1",
    "vflzVne63": "15982 w59 s2 r",
    "vflO-N-9M": "15986 w9 s1 w67 r s3",
    "vflZ4JlpT": "15988 s3 r s1 r w28 s1",
    "vflDgXSDS": "15988 s3 r s1 r w28 s1",
    "vflW444Sr": "15995 r w9 r s1 w51 w27 r s1 r",
    "vflK7RoTQ": "15996 w44 r w36 r w45",
    "vflKOCFq2": "16 s1 r w41 r w41 s1 w15",
    "vflcLL31E": "16 s1 r w41 r w41 s1 w15",
    "vflz9bT3N": "16 s1 r w41 r w41 s1 w15",
    "vfliZsE79": "16010 r s3 w49 s3 r w58 s2 r s2",
    "vfljOFtAt": "16014 r s3 r s1 r w69 r",
    "vflqSl9GX": "16023 w32 r s2 w65 w26 w45 w24 w40 s2",
    "vflFrKymJ": "16023 w32 r s2 w65 w26 w45 w24 w40 s2",
    "vflKz4WoM": "16027 w50 w17 r w7 w65",
    "vflhdWW8S": "16030 s2 w55 w10 s3 w57 r w25 w41",
    "vfl66X2C5": "16031 r s2 w34 s2 w39",
    "vflCXG8Sm": "16031 r s2 w34 s2 w39",
    "vfl_3Uag6": "16034 w3 w7 r s2 w27 s2 w42 r",
    "vflQdXVwM": "16047 s1 r w66 s2 r w12",
    "vflCtc3aO": "16051 s2 r w11 r s3 w28",
    "vflCt6YZX": "16051 s2 r w11 r s3 w28",
    "vflG49soT": "16057 w32 r s3 r s1 r w19 w24 s3",
    "vfl4cHApe": "16059 w25 s1 r s1 w27 w21 s1 w39",
    "vflwMrwdI": "16058 w3 r w39 r w51 s1 w36 w14",
    "vfl4AMHqP": "16060 r s1 w1 r w43 r s1 r",
    "vfln8xPyM": "16080 w36 w14 s1 r s1 w54",
    "vflVSLmnY": "16081 s3 w56 w10 r s2 r w28 w35",
    "vflkLvpg7": "16084 w4 s3 w53 s2",
    "vflbxes4n": "16084 w4 s3 w53 s2",
    "vflmXMtFI": "16092 w57 s3 w62 w41 s3 r w60 r",
    "vflYDqEW1": "16094 w24 s1 r s2 w31 w4 w11 r",
    "vflapGX6Q": "16093 s3 w2 w59 s2 w68 r s3 r s1",
    "vflLCYwkM": "16093 s3 w2 w59 s2 w68 r s3 r s1",
    "vflcY_8N0": "16100 s2 w36 s1 r w18 r w19 r",
    "vfl9qWoOL": "16104 w68 w64 w28 r",
    "vfle-mVwz": "16103 s3 w7 r s3 r w14 w59 s3 r",
    "vfltdb6U3": "16106 w61 w5 r s2 w69 s2 r",
    "vflLjFx3B": "16107 w40 w62 r s2 w21 s3 r w7 s3",
    "vfliqjKfF": "16107 w40 w62 r s2 w21 s3 r w7 s3",
    "ima-vflxBu-5R": "16107 w40 w62 r s2 w21 s3 r w7 s3",
    "ima-vflrGwWV9": "16119 w36 w45 r s2 r",
    "ima-vflCME3y0": "16128 w8 s2 r w52",
    "ima-vfl1LZyZ5": "16128 w8 s2 r w52",
    "ima-vfl4_saJa": "16130 r s1 w19 w9 w57 w38 s3 r s2",
    "ima-en_US-vflP9269H": "16129 r w63 w37 s3 r w14 r",
    "ima-en_US-vflkClbFb": "16136 s1 w12 w24 s1 w52 w70 s2",
    "ima-en_US-vflYhChiG": "16137 w27 r s3",
    "ima-en_US-vflWnCYSF": "16142 r s1 r s3 w19 r w35 w61 s2",
    "en_US-vflbT9-GA": "16146 w51 w15 s1 w22 s1 w41 r w43 r",
    "en_US-vflAYBrl7": "16144 s2 r w39 w43",
    "en_US-vflS1POwl": "16145 w48 s2 r s1 w4 w35",
    "en_US-vflLMtkhg": "16149 w30 r w30 w39",
    "en_US-vflbJnZqE": "16151 w26 s1 w15 w3 w62 w54 w22",
    "en_US-vflgd5txb": "16151 w26 s1 w15 w3 w62 w54 w22",
    "en_US-vflTm330y": "16151 w26 s1 w15 w3 w62 w54 w22",
    "en_US-vflnwMARr": "16156 s3 r w24 s2",
    "en_US-vflTq0XZu": "16160 r w7 s3 w28 w52 r",
    "en_US-vfl8s5-Vs": "16158 w26 s1 w14 r s3 w8",
    "en_US-vfl7i9w86": "16158 w26 s1 w14 r s3 w8",
    "en_US-vflA-1YdP": "16158 w26 s1 w14 r s3 w8",
    "en_US-vflZwcnOf": "16164 w46 s2 w29 r s2 w51 w20 s1",
    "en_US-vflFqBlmB": "16164 w46 s2 w29 r s2 w51 w20 s1",
    "en_US-vflG0UvOo": "16164 w46 s2 w29 r s2 w51 w20 s1",
    "en_US-vflS6PgfC": "16170 w40 s2 w40 r w56 w26 r s2",
    "en_US-vfl6Q1v_C": "16172 w23 r s2 w55 s2",
    "en_US-vflMYwWq8": "16177 w51 w32 r s1 r s3",
    "en_US-vflGC4r8Z": "16184 w17 w34 w66 s3",
    "en_US-vflyEvP6v": "16189 s1 r w26",
    "en_US-vflm397e5": "16189 s1 r w26",
    "en_US-vfldK8353": "16192 r s3 w32",
    "en_US-vflPTD6yH": "16196 w59 s1 w66 s3 w10 r w55 w70 s1",
    "en_US-vfl7KJl0G": "16196 w59 s1 w66 s3 w10 r w55 w70 s1",
    "en_US-vflhUwbGZ": "16200 w49 r w60 s2 w61 s3",
    "en_US-vflzEDYyE": "16200 w49 r w60 s2 w61 s3",
    "en_US-vflimfEzR": "16205 r s2 w68 w28",
    "en_US-vfl_nbW1R": "16206 r w8 r s3",
    "en_US-vfll7obaF": "16212 w48 w17 s2",
    "en_US-vfluBAJ91": "16216 w13 s1 w39",
    "en_US-vfldOnicU": "16217 s2 r w7 w21 r",
    "en_US-vflbbaSdm": "16221 w46 r s3 w19 r s2 w15",
    "en_US-vflIpxel5": "16225 r w16 w35",
    "en_US-vfloyxzv5": "16232 r w30 s3 r s3 r",
    "en_US-vflmY-xcZ": "16230 w25 r s1 w49 w52",
    "en_US-vflMVaJmz": "16236 w12 s3 w56 r s2 r",
    "en_US-vflgt97Vg": "16240 r s1 r",
    "en_US-vfl19qQQ_": "16241 s2 w55 s2 r w39 s2 w5 r s3",
    "en_US-vflws3c7_": "16243 r s1 w52",
    "en_US-vflPqsNqq": "16243 r s1 w52",
    "en_US-vflycBCEX": "16247 w12 s1 r s3 w17 s1 w9 r",
    "en_US-vflhZC-Jn": "16252 w69 w70 s3",
    "en_US-vfl9r3Wpv": "16255 r s3 w57",
    "en_US-vfl6UPpbU": "16259 w37 r s1",
    "en_US-vfl_oxbbV": "16259 w37 r s1",
    "en_US-vflXGBaUN": "16259 w37 r s1",
    "en_US-vflM1arS5": "16262 s1 r w42 r s1 w27 r w54",
    "en_US-vfl0Cbn9e": "16265 w15 w44 r w24 s3 r w2 w50",
    "en_US-vfl5aDZwb": "16265 w15 w44 r w24 s3 r w2 w50",
    "en_US-vflqZIm5b": "16268 w1 w32 s1 r s3 r s3 r",
    "en_US-vflBb0OQx": "16272 w53 r w9 s2 r s1",
    "en_US-vflCGk6yw/html5player": "16275 s2 w28 w44 w26 w40 w64 r s1",
    "en_US-vflNUsYw0/html5player": "16280 r s3 w7",
    "en_US-vflId8cpZ/html5player": "16282 w30 w21 w26 s1 r s1 w30 w11 w20",
    "en_US-vflEyBLiy/html5player": "16283 w44 r w15 s2 w40 r s1",
    "en_US-vflHkCS5P/html5player": "16287 s2 r s3 r w41 s1 r s1 r",
    "en_US-vflArxUZc/html5player": "16289 r w12 r s3 w14 w61 r",
    "en_US-vflCsMU2l/html5player": "16292 r s2 r w64 s1 r s3",
    "en_US-vflY5yrKt/html5player": "16294 w8 r s2 w37 s1 w21 s3",
    "en_US-vfl4b4S6W/html5player": "16295 w40 s1 r w40 s3 r w47 r",
    "en_US-vflLKRtyE/html5player": "16298 w5 r s1 r s2 r",
    "en_US-vflrSlC04/html5player": "16300 w28 w58 w19 r s1 r s1 r",
    "en_US-vflC7g_iA/html5player": "16300 w28 w58 w19 r s1 r s1 r",
    "en_US-vfll1XmaE/html5player": "16303 r w9 w23 w29 w36 s2 r",
    "en_US-vflWRK4zF/html5player": "16307 r w63 r s3",
    "en_US-vflQSzMIW/html5player": "16309 r s1 w40 w70 s2 w28 s1",
    "en_US-vfltYLx8B/html5player": "16310 s3 w19 w24",
    "en_US-vflWnljfv/html5player": "16311 s2 w60 s3 w42 r w40 s2 w68 w20",
    "en_US-vflDJ-wUY/html5player": "16316 s2 w18 s2 w68 w15 s1 w45 s1 r",
    "en_US-vfllxLx6Z/html5player": "16309 r s1 w40 w70 s2 w28 s1",
    "en_US-vflI3QYI2/html5player": "16318 s3 w22 r s3 w19 s1 r",
    "en_US-vfl-ZO7j_/html5player": "16322 s3 w21 s1",
    "en_US-vflWGRWFI/html5player": "16324 r w27 r s1 r",
    "en_US-vflJkTW89/html5player": "16328 w12 s1 w67 r w39 w65 s3 r s1",
    "en_US-vflB8RV2U/html5player": "16329 r w26 r w28 w38 r s3",
    "en_US-vflBFNwmh/html5player": "16329 r w26 r w28 w38 r s3",
    "en_US-vflE7vgXe/html5player": "16331 w46 w22 r w33 r s3 w18 r s3",
    "en_US-vflx8EenD/html5player": "16334 w8 s3 w45 w46 s2 w29 w25 w56 w2",
    "en_US-vflfgwjRj/html5player": "16336 r s2 w56 r s3",
    "en_US-vfl15y_l6/html5player": "16334 w8 s3 w45 w46 s2 w29 w25 w56 w2",
    "en_US-vflYqHPcx/html5player": "16341 s3 r w1 r",
    "en_US-vflcoeQIS/html5player": "16344 s3 r w64 r s3 r w68",
    "en_US-vflz7mN60/html5player": "16345 s2 w16 w39",
    "en_US-vfl4mDBLZ/html5player": "16348 r w54 r s2 w49",
    "en_US-vflKzH-7N/html5player": "16348 r w54 r s2 w49",
    "en_US-vflgoB_xN/html5player": "16345 s2 w16 w39",
    "en_US-vflPyRPNk/html5player": "16353 r w34 w9 w56 r s3 r w30",
    "en_US-vflG0qgr5/html5player": "16345 s2 w16 w39",
    "en_US-vflzDhHvc/html5player": "16358 w26 s1 r w8 w24 w18 r s2 r",
    "en_US-vflbeC7Ip/html5player": "16359 r w21 r s2 r",
    "en_US-vflBaDm_Z/html5player": "16363 s3 w5 s1 w20 r",
    "en_US-vflr38Js6/html5player": "16364 w43 s1 r",
    "en_US-vflg1j_O9/html5player": "16365 s2 r s3 r s3 r w2",
    "en_US-vflPOfApl/html5player": "16371 s2 w38 r s3 r",
    "en_US-vflMSJ2iW/html5player": "16366 s2 r w4 w22 s2 r s2",
    "en_US-vflckDNUK/html5player": "16373 s3 r w66 r s3 w1 w12 r",
    "en_US-vflKCJBPS/html5player": "16374 w15 w2 s1 r s3 r",
    "en_US-vflcF0gLP/html5player": "16375 s3 w10 s1 r w28 s1 w40 w64 r",
    "en_US-vflpRHqKc/html5player": "16377 w39 r w48 r",
    "en_US-vflbcuqSZ/html5player": "16379 r s1 w27 s2 w5 w7 w51 r",
    "en_US-vflHf2uUU/html5player": "16379 r s1 w27 s2 w5 w7 w51 r",
    "en_US-vfln6g5Eq/html5player": "16385 w1 r s3 r s2 w10 s3 r",
    "en_US-vflM7pYrM/html5player": "16387 r s2 r w3 r w11 r",
    "en_US-vflP2rJ1-/html5player": "16387 r s2 r w3 r w11 r",
    "en_US-vflXs0FWW/html5player": "16392 w63 s1 r w46 s2 r s3",
    "en_US-vflEhuJxd/html5player": "16392 w63 s1 r w46 s2 r s3",
    "en_US-vflp3wlqE/html5player": "16396 w22 s3 r",
    "en_US-vfl5_7-l5/html5player": "16396 w22 s3 r",
    "en_US-vfljnKokH/html5player": "16400 s3 w15 s2 w30 w11",
    "en_US-vflIlILAX/html5player": "16407 r w7 w19 w38 s3 w41 s1 r w1",
    "en_US-vflEegqdq/html5player": "16407 r w7 w19 w38 s3 w41 s1 r w1",
    "en_US-vflkOb-do/html5player": "16407 r w7 w19 w38 s3 w41 s1 r w1",
    "en_US-vfllt8pl6/html5player": "16419 r w17 w33 w53",
    "en_US-vflsXGZP2/html5player": "16420 s3 w38 s1 w16 r w20 w69 s2 w15",
    "en_US-vflw4H1P-/html5player": "16427 w8 r s1",
    "en_US-vflmgJnmS/html5player": "16421 s3 w20 r w34 r s1 r",
    "en_US-vfl86Quee/html5player": "16450 s3 r w25 w29 r w17 s2 r",
    "en_US-vfl19kCnd/html5player": "16444 r w29 s1 r s1 r w4 w28",
    "en_US-vflbHLA_P/html5player": "16451 r w20 r w20 s2 r",
    "en_US-vfl_ZlzZL/html5player": "16455 w61 r s1 w31 w36 s1",
    "en_US-vflbeV8LH/html5player": "16455 w61 r s1 w31 w36 s1",
    "en_US-vflhJatih/html5player": "16462 s2 w44 r s3 w17 s1",
    "en_US-vflvmwLwg/html5player": "16462 s2 w44 r s3 w17 s1",
    "en_US-vflljBsG4/html5player": "16462 s2 w44 r s3 w17 s1",
    "en_US-vflT5ziDW/html5player": "16462 s2 w44 r s3 w17 s1",
    "en_US-vflwImypH/html5player": "16471 s3 r w23 s2 w29 r w44",
    "en_US-vflQkSGin/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vflqnkATr/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vflZvrDTQ/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vflKjOTVq/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vfluEf7CP/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vflF2Mg88/html5player": "16475 w70 r w66 s1 w70 w26 r w48",
    "en_US-vflQTSOsS/html5player": "16489 s3 r w23 s1 w19 w43 w36",
    "en_US-vflbaqfRh/html5player": "16489 s3 r w23 s1 w19 w43 w36",
    "en_US-vflcL_htG/html5player": "16491 w20 s3 w37 r",
    "en_US-vflTbHYa9/html5player": "16498 s3 w44 s1 r s1 r s3 r s3",
    "en_US-vflT9SJ6t/html5player": "16497 w66 r s3 w60",
    "en_US-vfl6xsolJ/html5player": "16503 s1 w4 s1 w39 s3 r",
    "en_US-vflA6e-lH/html5player": "16503 s1 w4 s1 w39 s3 r",
    "en_US-vflu7AB7p/html5player": "16503 s1 w4 s1 w39 s3 r",
    "en_US-vflQb7e_A/html5player": "16510 w19 w35 r s2 r s1 w64 s2 w53",
    "en_US-vflicH9X6/html5player": "16510 w19 w35 r s2 r s1 w64 s2 w53",
    "en_US-vflvDDxpc/html5player": "16510 w19 w35 r s2 r s1 w64 s2 w53",
    "en_US-vflSp2y2y/html5player": "16510 w19 w35 r s2 r s1 w64 s2 w53",
    "en_US-vflFAPa9H/html5player": "16510 w19 w35 r s2 r s1 w64 s2 w53",
    "en_US-vflImsVHZ/html5player": "16518 r w1 r w17 s2 r",
    "en_US-vfllLRozy/html5player": "16518 r w1 r w17 s2 r",
    "en_US-vfldudhuW/html5player": "16518 r w1 r w17 s2 r",
    "en_US-vfl20EdcH/html5player": "16511 w12 w18 s1 w60",
    "en_US-vflCiLqoq/html5player": "16511 w12 w18 s1 w60",
    "en_US-vflOOhwh5/html5player": "16518 r w1 r w17 s2 r",
    "en_US-vflUPVjIh/html5player": "16511 w12 w18 s1 w60",
    "en_US-vfleI-biQ/html5player": "16519 w39 s3 r s1 w36",
    "en_US-vflWLYnud/html5player": "16538 r w41 w65 w11 r",
    "en_US-vflCbhV8k/html5player": "16538 r w41 w65 w11 r",
    "en_US-vflXIPlZ4/html5player": "16538 r w41 w65 w11 r",
    "en_US-vflJ97NhI/html5player": "16538 r w41 w65 w11 r",
    "en_US-vflV9R5dM/html5player": "16538 r w41 w65 w11 r",
    "en_US-vflkH_4LI/html5player": "16546 w13 s1 w4 s2 r s2 w25",
    "en_US-vflfy61br/html5player": "16546 w13 s1 w4 s2 r s2 w25",
    "en_US-vfl1r59NI/html5player": "16548 r w42 s1 r w29 r w2 s2 r",
    "en_US-vfl98hSpx/html5player": "16548 r w42 s1 r w29 r w2 s2 r",
    "en_US-vflheTb7D/html5player": "16554 r s1 w40 s2 r w6 s3 w60",
    "en_US-vflnbdC7j/html5player": "16555 w52 w25 w62 w51 w2 s2 r s1",
    "new-en_US-vfladkLoo/html5player-new": "16555 w52 w25 w62 w51 w2 s2 r s1",
    "en_US-vflTjpt_4/html5player": "16560 w14 r s1 w37 w61 r",
    "en_US-vflN74631/html5player": "16560 w14 r s1 w37 w61 r",
    "en_US-vflj7H3a2/html5player": "16560 w14 r s1 w37 w61 r",
    "en_US-vflQbG2p4/html5player": "16560 w14 r s1 w37 w61 r",
    "en_US-vflHV7Wup/html5player": "16560 w14 r s1 w37 w61 r",
    "en_US-vflCbZ69_/html5player": "16574 w3 s3 w45 r w3 w2 r w13 r",
    "en_US-vflugm_Hi/html5player": "16574 w3 s3 w45 r w3 w2 r w13 r",
    "en_US-vfl3tSKxJ/html5player": "16577 w37 s3 w57 r w5 r w13 r",
    "en_US-vflE8_7k0/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vflmxRINy/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vflQEtHy6/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vflRqg76I/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vfloIm75c/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vfl0JH6Oo/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vflHvL0kQ/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "new-en_US-vflGBorXT/html5player-new": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vfl4Y6g4o/html5player": "16582 r w41 s3 w69 s1 w66 r w27 s2",
    "en_US-vflKAbZ28/html5player": "16597 s3 r s2",
    "en_US-vflM5YBLT/html5player": "16602 s2 w25 w14 s1 r",
    "en_US-vflnSSUZV/html5player": "16603 w20 s2 w11 s3 r s1 w2 w15",
    "en_US-vfla1HjWj/html5player": "16603 w20 s2 w11 s3 r s1 w2 w15",
    "en_US-vflPcWTEd/html5player": "16603 w20 s2 w11 s3 r s1 w2 w15",
    "en_US-vfljL8ofl/html5player": "16609 w29 r s1 r w59 r w45",
    "en_US-vflUXoyA8/html5player": "16609 w29 r s1 r w59 r w45",
    "en_US-vflzomeEU/html5player": "16609 w29 r s1 r w59 r w45",
    "en_US-vflihzZsw/html5player": "16617 s3 r s3 w17",
    "en_US-vfld2QbH7/html5player": "16623 w58 w46 s1 w9 r w54 s2 r w55",
    "en_US-vflVsMRd_/html5player": "16623 w58 w46 s1 w9 r w54 s2 r w55",
    "en_US-vflp6cSzi/html5player": "16625 w52 w23 s1 r s2 r s2 r",
    "en_US-vflr_ZqiK/html5player": "16625 w52 w23 s1 r s2 r s2 r",
    "en_US-vflDv401v/html5player": "16636 r w68 w58 r w28 w44 r",
    "en_US-vflP7pyW6/html5player": "16636 r w68 w58 r w28 w44 r",
    "en_US-vfly-Z1Od/html5player": "16636 r w68 w58 r w28 w44 r",
    "en_US-vflSxbpbe/html5player": "16636 r w68 w58 r w28 w44 r",
    "en_US-vflGx3XCd/html5player": "16636 r w68 w58 r w28 w44 r",
    "new-en_US-vflIgTSdc/html5player-new": "16648 r s2 r w43 w41 w8 r w67 r",
    "new-en_US-vflnk2PHx/html5player-new": "16651 r w32 s3 r s1 r",
    "new-en_US-vflo_te46/html5player-new": "16652 r s2 w27 s1",
    "new-en_US-vfllZzMNK/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vflxgfwPf/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vflTSd4UU/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vfl2Ys-gC/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vflRWS2p7/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vflVBD1Nz/html5player-new": "16657 w11 w29 w63 r w45 w34 s2",
    "new-en_US-vflJVflpM/html5player-new": "16667 r s1 r w8 r w5 s2 w30 w66",
    "en_US-vfleu-UMC/html5player": "16667 r s1 r w8 r w5 s2 w30 w66",
    "new-en_US-vflOWWv0e/html5player-new": "16667 r s1 r w8 r w5 s2 w30 w66",
    "new-en_US-vflyGTTiE/html5player-new": "16674 w68 s3 w66 s1 r",
    "new-en_US-vflCeB3p5/html5player-new": "16674 w68 s3 w66 s1 r",
    "new-en_US-vflhlPTtB/html5player-new": "16682 w40 s3 w53 w11 s3 r s3 w16 r",
    "new-en_US-vflSnomqH/html5player-new": "16689 w56 w12 r w26 r",
    "new-en_US-vflkiOBi0/html5player-new": "16696 w55 w69 w61 s2 r",
    "new-en_US-vflpNjqAo/html5player-new": "16696 w55 w69 w61 s2 r",
    "new-en_US-vflOdTWmK/html5player-new": "16696 w55 w69 w61 s2 r",
    "new-en_US-vfl9jbnCC/html5player-new": "16703 s1 r w18 w67 r s3 r",
    "new-en_US-vflyM0pli/html5player-new": "16696 w55 w69 w61 s2 r",
    "new-en_US-vflJLt_ns/html5player-new": "16708 w19 s2 r s2 w48 r s2 r",
    "new-en_US-vflqLE6s6/html5player-new": "16708 w19 s2 r s2 w48 r s2 r",
    "new-en_US-vflzRMCkZ/html5player-new": "16711 r s3 r s2 w62 w25 s1 r",
    "new-en_US-vflIUNjzZ/html5player-new": "16711 r s3 r s2 w62 w25 s1 r",
    "new-en_US-vflOw5Ej1/html5player-new": "16711 r s3 r s2 w62 w25 s1 r",
    "new-en_US-vflq2mOFv/html5player-new": "16714 r w37 r w19 r s3 r w5",
    "new-en_US-vfl8AWn6F/html5player-new": "16714 r w37 r w19 r s3 r w5",
    "new-en_US-vflEA2BSM/html5player-new": "16714 r w37 r w19 r s3 r w5",
    "new-en_US-vflt2Xpp6/html5player-new": "16717 r s1 w14",
    "new-en_US-vflDpriqR/html5player-new": "16714 r w37 r w19 r s3 r w5",
    "new-en_US-vflptVjJB/html5player-new": "16723 s2 r s3 w54 w60 w55 w65",
    "new-en_US-vflmR8A04/html5player-new": "16725 w28 s2 r",
    "new-en_US-vflx6L8FI/html5player-new": "16735 r s2 r w65 w1 s1",
    "new-en_US-vflYZP7XE/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "new-en_US-vflQZZsER/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "new-en_US-vflsLAYSi/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "new-en_US-vflZWDr6u/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "new-en_US-vflJoRj2J/html5player-new": "16742 w69 w47 r s1 r s1 r w43 s2",
    "new-en_US-vflFSFCN-/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "new-en_US-vfl6mEKMp/html5player-new": "16734 s1 r s1 w56 w46 s2 r",
    "player-en_US-vflJENbn4/base": "16748 s1 w31 r",
    "player-en_US-vfltBCT02/base": "16756 r s2 r w18 w62 w45 s1",
    "player-en_US-vfl0w9xAB/base": "16756 r s2 r w18 w62 w45 s1",
    "player-en_US-vflCIicNM/base": "16759 w2 s3 r w38 w21 w58",
    "player-en_US-vflUpjAy9/base": "16758 w26 s3 r s3 r s3 w61 s3 r",
    "player-en_US-vflFEzfy7/base": "16758 w26 s3 r s3 r s3 w61 s3 r",
    "player-en_US-vfl_RJZIW/base": "16770 w3 w2 s3 w39 s2 r s2",
    "player-en_US-vfln_PDe6/base": "16770 w3 w2 s3 w39 s2 r s2",
    "player-en_US-vflx9OkTA/base": "16772 s2 w50 r w15 w66 s3",
}

CIPHER_TABLE = MappingProxyType(_CIPHERS)


def lookup(version_key: str) -> str | None:
    """Returns the program text for `version_key`, or None if it is not known."""
    return CIPHER_TABLE.get(version_key)
