"""Sample file contents shared across tests."""

TWENTY_THREE_AND_ME = (
    "# This data file generated by 23andMe at: Mon Jan 01 00:00:00 2024\n"
    "# build: 37\n"
    "rsid\tchromosome\tposition\tgenotype\n"
    "rs123\t1\t100\tAG\n"
    "rs124\t2\t200\tGG\n"
    "rs125\t1\t50\t--\n"
    "rs126\tchrUn\t300\tAA\n"
    "rs127\tX\t400\tC\n"
    "rs128\tMT\t73\tA\n"
    "rs129\t3\t500\t0\n"
)

ANCESTRY_DNA = (
    "#AncestryDNA raw data download\n"
    "rsid\tchromosome\tposition\tallele1\tallele2\n"
    "rs1\t1\t1000\tA\tG\n"
    "rs2\t23\t2000\tT\tT\n"
    "rs3\t5\t3000\t0\t0\n"
    "rs4\t6\t4000\tA\t0\n"
    "rs5\t25\t5000\tC\tC\n"
)

MY_HERITAGE = (
    "##fileformat=MyHeritage\n"
    '"RSID","CHROMOSOME","POSITION","RESULT"\n'
    '"rs10","1","100","CT"\n'
    '"rs11","2","200","--"\n'
    '"rs12","3","300","AA"\n'
)

# USER vs EUR1: identical everywhere (5/5); vs EUR2: 2/4; vs AFR1: 0/4; vs EAS1: 1/4.
# The last line only carries genotypes for USER and EUR1.
REFERENCE_VCF = (
    "##fileformat=VCFv4.3\n"
    "##source=test\n"
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tUSER\tEUR1\tEUR2\tAFR1\tEAS1\n"
    "1\t100\trs1\tA\tG\t60\tPASS\t.\tGT\t0/1\t0/1\t0/1\t1/1\t0/0\n"
    "1\t200\trs2\tC\tT\t.\tPASS\t.\tGT\t0/0\t0/0\t1/1\t1/1\t0/0\n"
    "2\t300\trs3\tG\tA\t50\tPASS\t.\tGT\t0/1\t0/1\t0/1\t0/0\t0/0\n"
    "X\t400\trs4\tT\tC\t40\tPASS\t.\tGT\t1/1\t1/1\t0/0\t0/0\t0/1\n"
    "X\t500\trs5\tA\tC\t40\tPASS\t.\tGT\t0/0\t0/0\n"
)

# GHOST is listed in the panel but has no column in REFERENCE_VCF.
PANEL = (
    "sample\tpop\tsuper_pop\tgender\n"
    "EUR1\tGBR\tEUR\tmale\n"
    "EUR2\tCEU\tEUR\tfemale\n"
    "AFR1\tYRI\tAFR\tfemale\n"
    "GHOST\tYRI\tAFR\tmale\n"
    "EAS1\tCHB\tEAS\tmale\n"
)
