"""Resources that manage files, directories, links, shell commands and FreeBSD services."""