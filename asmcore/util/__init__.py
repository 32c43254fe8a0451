"""Big integers, bit vectors and their formats, files, file names, symbols and styling."""